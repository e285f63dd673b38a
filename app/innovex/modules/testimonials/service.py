from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from app.innovex.audit import record_event
from app.innovex.constants import TESTIMONIAL_RATINGS
from app.innovex.utils import clean, parse_bool, parse_int, require_fields

if TYPE_CHECKING:
    from sqlalchemy.orm import Session
    from app.innovex.models import User
    from app.innovex.modules.testimonials.models import Testimonial

PUBLIC_LIMIT = 6


def validate_testimonial_payload(payload: dict) -> list[str]:
    errors = require_fields(payload, (("name", "Name"), ("role", "Role"), ("content", "Content")))
    try:
        rating = parse_int(payload.get("rating"))
        if rating is not None and rating not in TESTIMONIAL_RATINGS:
            errors.append("Rating must be between 1 and 5.")
    except ValueError:
        errors.append("Rating must be a whole number.")
    return errors


def is_public(t: "Testimonial") -> bool:
    return bool(t.is_approved and t.is_featured)


def list_testimonials(s: "Session") -> list["Testimonial"]:
    from app.innovex.modules.testimonials.models import Testimonial

    return s.query(Testimonial).order_by(Testimonial.created_at.desc(), Testimonial.id.desc()).all()


def list_public_testimonials(s: "Session", limit: int = PUBLIC_LIMIT) -> list["Testimonial"]:
    """Approved AND featured only."""
    from app.innovex.modules.testimonials.models import Testimonial

    return (
        s.query(Testimonial)
        .filter(Testimonial.is_approved.is_(True), Testimonial.is_featured.is_(True))
        .order_by(Testimonial.created_at.desc(), Testimonial.id.desc())
        .limit(limit)
        .all()
    )


def save_testimonial(
    s: "Session",
    t: "Testimonial | None",
    payload: dict,
    user: "User",
    image_url: str | None = None,
) -> "Testimonial":
    """Insert when `t` is None, otherwise update the same row."""
    from app.innovex.modules.testimonials.models import Testimonial

    now = datetime.utcnow()
    is_new = t is None
    if t is None:
        t = Testimonial(created_at=now)
        s.add(t)

    t.name = (payload.get("name") or "").strip()
    t.role = (payload.get("role") or "").strip()
    t.company = clean(payload.get("company"))
    t.content = (payload.get("content") or "").strip()
    t.rating = parse_int(payload.get("rating")) or 5
    t.event_name = clean(payload.get("event_name"))
    if image_url is not None:
        t.image_url = image_url
    elif parse_bool(payload.get("remove_image")):
        t.image_url = None
    t.is_approved = parse_bool(payload.get("is_approved"))
    t.is_featured = parse_bool(payload.get("is_featured"))
    t.updated_at = now
    s.flush()

    record_event(
        s,
        actor=user,
        action="testimonial.create" if is_new else "testimonial.edit",
        entity_type="Testimonial",
        entity_id=str(t.id),
        metadata={"name": t.name, "is_approved": t.is_approved, "is_featured": t.is_featured},
    )
    return t


def set_testimonial_flag(s: "Session", t: "Testimonial", flag: str, value: bool, user: "User") -> None:
    if flag not in ("is_approved", "is_featured"):
        raise ValueError(f"Unknown testimonial flag: {flag}")
    setattr(t, flag, value)
    t.updated_at = datetime.utcnow()
    record_event(
        s,
        actor=user,
        action=f"testimonial.{flag}",
        entity_type="Testimonial",
        entity_id=str(t.id),
        metadata={"value": value},
    )


def delete_testimonial(s: "Session", t: "Testimonial", user: "User") -> None:
    record_event(
        s,
        actor=user,
        action="testimonial.delete",
        entity_type="Testimonial",
        entity_id=str(t.id),
        metadata={"name": t.name},
    )
    s.delete(t)
