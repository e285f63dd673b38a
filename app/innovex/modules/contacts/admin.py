from __future__ import annotations

from flask import Blueprint, abort, flash, g, redirect, render_template, url_for

from app.innovex.db import db_session
from app.innovex.models import User
from app.innovex.modules.contacts.models import ContactSubmission
from app.innovex.modules.contacts.service import delete_contact, list_contacts, mark_read
from app.innovex.rbac import require_admin

bp = Blueprint("contacts_admin", __name__)


def _current_user() -> User:
    u = getattr(g, "current_user", None)
    if not u:
        raise RuntimeError("No current user")
    return u


@bp.get("/messages")
@require_admin
def messages_list():
    s = db_session()
    return render_template("admin/contacts/list.html", contacts=list_contacts(s), active_tab="contacts")


@bp.post("/messages/<int:contact_id>/read")
@require_admin
def messages_mark_read(contact_id: int):
    s = db_session()
    c = s.get(ContactSubmission, contact_id)
    if not c:
        abort(404)
    mark_read(s, c, _current_user())
    s.commit()
    flash("Marked as read", "success")
    return redirect(url_for("contacts_admin.messages_list"))


@bp.post("/messages/<int:contact_id>/delete")
@require_admin
def messages_delete(contact_id: int):
    s = db_session()
    c = s.get(ContactSubmission, contact_id)
    if not c:
        abort(404)
    delete_contact(s, c, _current_user())
    s.commit()
    flash("Message deleted", "success")
    return redirect(url_for("contacts_admin.messages_list"))
