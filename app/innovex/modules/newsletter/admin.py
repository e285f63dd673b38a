from __future__ import annotations

from flask import Blueprint, abort, flash, g, redirect, render_template, url_for

from app.innovex.csv_export import csv_download
from app.innovex.db import db_session
from app.innovex.models import User
from app.innovex.modules.newsletter.models import NewsletterSubscription
from app.innovex.modules.newsletter.service import list_subscriptions, set_active, subscription_export_rows
from app.innovex.rbac import require_admin

bp = Blueprint("newsletter_admin", __name__)


def _current_user() -> User:
    u = getattr(g, "current_user", None)
    if not u:
        raise RuntimeError("No current user")
    return u


@bp.get("/newsletter")
@require_admin
def newsletter_list():
    s = db_session()
    return render_template("admin/newsletter/list.html", subscribers=list_subscriptions(s), active_tab="newsletter")


@bp.post("/newsletter/<int:subscription_id>/toggle")
@require_admin
def newsletter_toggle(subscription_id: int):
    s = db_session()
    sub = s.get(NewsletterSubscription, subscription_id)
    if not sub:
        abort(404)
    set_active(s, sub, not sub.is_active, _current_user())
    s.commit()
    flash("Subscriber reactivated." if sub.is_active else "Subscriber deactivated.", "success")
    return redirect(url_for("newsletter_admin.newsletter_list"))


@bp.get("/newsletter/export")
@require_admin
def newsletter_export():
    s = db_session()
    rows = subscription_export_rows(list_subscriptions(s))
    if not rows:
        flash("No data to export", "danger")
        return redirect(url_for("newsletter_admin.newsletter_list"))
    return csv_download(rows, "newsletter-subscribers")
