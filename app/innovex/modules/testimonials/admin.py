from __future__ import annotations

from flask import Blueprint, abort, current_app, flash, g, redirect, render_template, request, url_for

from app.innovex.constants import TESTIMONIAL_RATINGS
from app.innovex.db import db_session
from app.innovex.models import User
from app.innovex.modules.testimonials.models import Testimonial
from app.innovex.modules.testimonials.service import (
    delete_testimonial,
    list_testimonials,
    save_testimonial,
    set_testimonial_flag,
    validate_testimonial_payload,
)
from app.innovex.rbac import require_admin
from app.innovex.storage import StorageError, storage_from_config
from app.innovex.uploads import IMAGE_CONTENT_TYPES, UploadRejected, store_request_file

bp = Blueprint("testimonials_admin", __name__)


def _current_user() -> User:
    u = getattr(g, "current_user", None)
    if not u:
        raise RuntimeError("No current user")
    return u


@bp.get("/testimonials")
@require_admin
def testimonials_list():
    s = db_session()
    return render_template("admin/testimonials/list.html", testimonials=list_testimonials(s), active_tab="testimonials")


@bp.get("/testimonials/new")
@require_admin
def testimonials_new_get():
    return render_template(
        "admin/testimonials/form.html", testimonial=None, ratings=TESTIMONIAL_RATINGS, active_tab="testimonials"
    )


@bp.get("/testimonials/<int:testimonial_id>/edit")
@require_admin
def testimonials_edit_get(testimonial_id: int):
    s = db_session()
    t = s.get(Testimonial, testimonial_id)
    if not t:
        abort(404)
    return render_template(
        "admin/testimonials/form.html", testimonial=t, ratings=TESTIMONIAL_RATINGS, active_tab="testimonials"
    )


@bp.post("/testimonials/new", defaults={"testimonial_id": None})
@bp.post("/testimonials/<int:testimonial_id>/edit")
@require_admin
def testimonials_save(testimonial_id: int | None):
    s = db_session()
    t = None
    if testimonial_id is not None:
        t = s.get(Testimonial, testimonial_id)
        if not t:
            abort(404)
    back = (
        url_for("testimonials_admin.testimonials_edit_get", testimonial_id=testimonial_id)
        if testimonial_id
        else url_for("testimonials_admin.testimonials_new_get")
    )

    payload = {
        "name": request.form.get("name"),
        "role": request.form.get("role"),
        "company": request.form.get("company"),
        "content": request.form.get("content"),
        "rating": request.form.get("rating"),
        "event_name": request.form.get("event_name"),
        "is_approved": request.form.get("is_approved"),
        "is_featured": request.form.get("is_featured"),
        "remove_image": request.form.get("remove_image"),
    }
    errors = validate_testimonial_payload(payload)
    if errors:
        for e in errors:
            flash(e, "danger")
        return redirect(back)

    try:
        image_url = store_request_file(
            storage_from_config(current_app.config),
            request.files.get("image"),
            folder="testimonials",
            allowed_types=IMAGE_CONTENT_TYPES,
        )
    except UploadRejected as e:
        flash(str(e), "danger")
        return redirect(back)
    except StorageError as e:
        current_app.logger.error("Image upload failed: %s", e)
        flash("Failed to upload image. Please try again.", "danger")
        return redirect(back)

    save_testimonial(s, t, payload, _current_user(), image_url=image_url)
    s.commit()
    flash("Testimonial updated." if testimonial_id else "Testimonial created.", "success")
    return redirect(url_for("testimonials_admin.testimonials_list"))


@bp.post("/testimonials/<int:testimonial_id>/approve")
@require_admin
def testimonials_toggle_approval(testimonial_id: int):
    s = db_session()
    t = s.get(Testimonial, testimonial_id)
    if not t:
        abort(404)
    was_approved = t.is_approved
    set_testimonial_flag(s, t, "is_approved", not was_approved, _current_user())
    s.commit()
    flash("Testimonial unapproved" if was_approved else "Testimonial approved", "success")
    return redirect(url_for("testimonials_admin.testimonials_list"))


@bp.post("/testimonials/<int:testimonial_id>/feature")
@require_admin
def testimonials_toggle_featured(testimonial_id: int):
    s = db_session()
    t = s.get(Testimonial, testimonial_id)
    if not t:
        abort(404)
    set_testimonial_flag(s, t, "is_featured", not t.is_featured, _current_user())
    s.commit()
    flash("Testimonial featured" if t.is_featured else "Testimonial unfeatured", "success")
    return redirect(url_for("testimonials_admin.testimonials_list"))


@bp.post("/testimonials/<int:testimonial_id>/delete")
@require_admin
def testimonials_delete(testimonial_id: int):
    s = db_session()
    t = s.get(Testimonial, testimonial_id)
    if not t:
        abort(404)
    delete_testimonial(s, t, _current_user())
    s.commit()
    flash("Testimonial deleted", "success")
    return redirect(url_for("testimonials_admin.testimonials_list"))
