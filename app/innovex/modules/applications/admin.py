from __future__ import annotations

from flask import Blueprint, abort, flash, g, redirect, render_template, request, url_for

from app.innovex.constants import APPLICATION_STATUSES
from app.innovex.csv_export import csv_download
from app.innovex.db import db_session
from app.innovex.models import User
from app.innovex.modules.applications.models import Application
from app.innovex.modules.applications.service import (
    application_export_rows,
    delete_application,
    list_applications,
    update_application_status,
)
from app.innovex.rbac import require_admin

bp = Blueprint("applications_admin", __name__)

# url segment -> (application kind, tab title, export label)
_KINDS = {
    "interns": ("internship", "Intern Applications", "intern-applications"),
    "careers": ("career", "Career Applications", "career-applications"),
}


def _current_user() -> User:
    u = getattr(g, "current_user", None)
    if not u:
        raise RuntimeError("No current user")
    return u


def _kind_or_404(section: str) -> tuple[str, str, str]:
    if section not in _KINDS:
        abort(404)
    return _KINDS[section]


def _get_or_404(section: str, application_id: int) -> Application:
    kind, _, _ = _kind_or_404(section)
    s = db_session()
    app_row = s.get(Application, application_id)
    if not app_row or app_row.kind != kind:
        abort(404)
    return app_row


@bp.get("/<any(interns, careers):section>")
@require_admin
def applications_list(section: str):
    kind, title, _ = _kind_or_404(section)
    s = db_session()
    return render_template(
        "admin/applications/list.html",
        applications=list_applications(s, kind),
        statuses=APPLICATION_STATUSES,
        section=section,
        title=title,
        active_tab=section,
    )


@bp.post("/<any(interns, careers):section>/<int:application_id>/status")
@require_admin
def applications_status(section: str, application_id: int):
    app_row = _get_or_404(section, application_id)
    s = db_session()
    status = (request.form.get("status") or "").strip()
    try:
        update_application_status(s, app_row, status, _current_user())
    except ValueError as e:
        flash(str(e), "danger")
        return redirect(url_for("applications_admin.applications_list", section=section))
    s.commit()
    flash(f"Application {status}.", "success")
    return redirect(url_for("applications_admin.applications_list", section=section))


@bp.post("/<any(interns, careers):section>/<int:application_id>/delete")
@require_admin
def applications_delete(section: str, application_id: int):
    app_row = _get_or_404(section, application_id)
    s = db_session()
    delete_application(s, app_row, _current_user())
    s.commit()
    flash("Application deleted.", "success")
    return redirect(url_for("applications_admin.applications_list", section=section))


@bp.get("/<any(interns, careers):section>/export")
@require_admin
def applications_export(section: str):
    kind, _, label = _kind_or_404(section)
    s = db_session()
    rows = application_export_rows(list_applications(s, kind))
    if not rows:
        flash("No data to export", "danger")
        return redirect(url_for("applications_admin.applications_list", section=section))
    return csv_download(rows, label)
