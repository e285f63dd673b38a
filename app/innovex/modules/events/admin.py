from __future__ import annotations

from flask import Blueprint, abort, current_app, flash, g, redirect, render_template, request, url_for

from app.innovex.constants import EVENT_TYPES, REGISTRATION_STATUSES
from app.innovex.csv_export import csv_download
from app.innovex.db import db_session
from app.innovex.models import User
from app.innovex.modules.events.models import Event, EventRegistration
from app.innovex.modules.events.service import (
    delete_event,
    list_events,
    list_registrations,
    registration_export_rows,
    save_event,
    set_event_published,
    update_registration_status,
    validate_event_payload,
)
from app.innovex.rbac import require_admin
from app.innovex.storage import StorageError, storage_from_config
from app.innovex.uploads import IMAGE_CONTENT_TYPES, UploadRejected, store_request_file

bp = Blueprint("events_admin", __name__)


def _current_user() -> User:
    u = getattr(g, "current_user", None)
    if not u:
        raise RuntimeError("No current user")
    return u


def _event_payload() -> dict:
    return {
        "title": request.form.get("title"),
        "description": request.form.get("description"),
        "event_type": request.form.get("event_type"),
        "event_date": request.form.get("event_date"),
        "location": request.form.get("location"),
        "max_participants": request.form.get("max_participants"),
        "registration_deadline": request.form.get("registration_deadline"),
        "is_published": request.form.get("is_published"),
        "remove_image": request.form.get("remove_image"),
    }


# ---------- List ----------
@bp.get("/events")
@require_admin
def events_list():
    s = db_session()
    return render_template("admin/events/list.html", events=list_events(s), active_tab="events")


# ---------- New / Edit ----------
@bp.get("/events/new")
@require_admin
def events_new_get():
    return render_template("admin/events/form.html", event=None, event_types=EVENT_TYPES, active_tab="events")


@bp.get("/events/<int:event_id>/edit")
@require_admin
def events_edit_get(event_id: int):
    s = db_session()
    event = s.get(Event, event_id)
    if not event:
        abort(404)
    return render_template("admin/events/form.html", event=event, event_types=EVENT_TYPES, active_tab="events")


@bp.post("/events/new", defaults={"event_id": None})
@bp.post("/events/<int:event_id>/edit")
@require_admin
def events_save(event_id: int | None):
    s = db_session()
    u = _current_user()
    event = None
    if event_id is not None:
        event = s.get(Event, event_id)
        if not event:
            abort(404)
    back = url_for("events_admin.events_edit_get", event_id=event_id) if event_id else url_for("events_admin.events_new_get")

    payload = _event_payload()
    errors = validate_event_payload(payload)
    if errors:
        for e in errors:
            flash(e, "danger")
        return redirect(back)

    try:
        image_url = store_request_file(
            storage_from_config(current_app.config),
            request.files.get("image"),
            folder="events",
            allowed_types=IMAGE_CONTENT_TYPES,
        )
    except UploadRejected as e:
        flash(str(e), "danger")
        return redirect(back)
    except StorageError as e:
        current_app.logger.error("Image upload failed: %s", e)
        flash("Failed to upload image. Please try again.", "danger")
        return redirect(back)

    save_event(s, event, payload, u, image_url=image_url)
    s.commit()
    flash("Event updated." if event_id else "Event created.", "success")
    return redirect(url_for("events_admin.events_list"))


@bp.post("/events/<int:event_id>/publish")
@require_admin
def events_toggle_publish(event_id: int):
    s = db_session()
    event = s.get(Event, event_id)
    if not event:
        abort(404)
    set_event_published(s, event, not event.is_published, _current_user())
    s.commit()
    flash("Event published." if event.is_published else "Event moved to draft.", "success")
    return redirect(url_for("events_admin.events_list"))


@bp.post("/events/<int:event_id>/delete")
@require_admin
def events_delete(event_id: int):
    s = db_session()
    event = s.get(Event, event_id)
    if not event:
        abort(404)
    delete_event(s, event, _current_user())
    s.commit()
    flash("Event deleted.", "success")
    return redirect(url_for("events_admin.events_list"))


# ---------- Registrations ----------
@bp.get("/registrations")
@require_admin
def registrations_list():
    s = db_session()
    return render_template(
        "admin/registrations/list.html",
        registrations=list_registrations(s),
        statuses=REGISTRATION_STATUSES,
        active_tab="registrations",
    )


@bp.post("/registrations/<int:registration_id>/status")
@require_admin
def registrations_status(registration_id: int):
    s = db_session()
    reg = s.get(EventRegistration, registration_id)
    if not reg:
        abort(404)
    status = (request.form.get("status") or "").strip()
    try:
        update_registration_status(s, reg, status, _current_user())
    except ValueError as e:
        flash(str(e), "danger")
        return redirect(url_for("events_admin.registrations_list"))
    s.commit()
    flash(f"Registration {status}.", "success")
    return redirect(url_for("events_admin.registrations_list"))


@bp.get("/registrations/export")
@require_admin
def registrations_export():
    s = db_session()
    rows = registration_export_rows(list_registrations(s))
    if not rows:
        flash("No data to export", "danger")
        return redirect(url_for("events_admin.registrations_list"))
    return csv_download(rows, "event-registrations")
