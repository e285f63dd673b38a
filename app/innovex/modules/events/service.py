from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from app.innovex.audit import record_event
from app.innovex.constants import EVENT_TYPES, REGISTRATION_STATUSES
from app.innovex.utils import clean, is_valid_email, parse_bool, parse_datetime, parse_int, require_fields

if TYPE_CHECKING:
    from sqlalchemy.orm import Session
    from app.innovex.models import User
    from app.innovex.modules.events.models import Event, EventRegistration


class RegistrationClosed(Exception):
    pass


def is_registration_open(event: "Event", now: datetime | None = None) -> bool:
    """Open until the deadline passes; events without a deadline are always open."""
    if event.registration_deadline is None:
        return True
    if now is None:
        now = datetime.now()
    return now <= event.registration_deadline


# ---------- Events ----------
def validate_event_payload(payload: dict) -> list[str]:
    """Validate event creation/update payload. Returns list of errors."""
    errors = require_fields(payload, (("title", "Title"), ("event_date", "Event date")))

    event_type = clean(payload.get("event_type")) or "workshop"
    if event_type not in EVENT_TYPES:
        errors.append(f"Invalid event type. Must be one of: {', '.join(EVENT_TYPES)}")

    for key, label in (("event_date", "Event date"), ("registration_deadline", "Registration deadline")):
        try:
            parse_datetime(payload.get(key))
        except ValueError:
            errors.append(f"{label} must be a valid date/time.")

    try:
        cap = parse_int(payload.get("max_participants"))
        if cap is not None and cap <= 0:
            errors.append("Max participants must be a positive number.")
    except ValueError:
        errors.append("Max participants must be a whole number.")
    return errors


def list_events(s: "Session") -> list["Event"]:
    from app.innovex.modules.events.models import Event

    return s.query(Event).order_by(Event.created_at.desc(), Event.id.desc()).all()


def list_published_events(s: "Session") -> list["Event"]:
    from app.innovex.modules.events.models import Event

    return s.query(Event).filter(Event.is_published.is_(True)).order_by(Event.event_date.asc()).all()


def save_event(s: "Session", event: "Event | None", payload: dict, user: "User", image_url: str | None = None) -> "Event":
    """Insert when `event` is None, otherwise update the same row."""
    from app.innovex.modules.events.models import Event

    now = datetime.utcnow()
    is_new = event is None
    if event is None:
        event = Event(created_at=now)
        s.add(event)

    event.title = (payload.get("title") or "").strip()
    event.description = clean(payload.get("description"))
    event.event_type = clean(payload.get("event_type")) or "workshop"
    event.event_date = parse_datetime(payload.get("event_date"))  # type: ignore[assignment]
    event.location = clean(payload.get("location"))
    event.max_participants = parse_int(payload.get("max_participants"))
    event.registration_deadline = parse_datetime(payload.get("registration_deadline"))
    event.is_published = parse_bool(payload.get("is_published"))
    if image_url is not None:
        event.image_url = image_url
    elif parse_bool(payload.get("remove_image")):
        event.image_url = None
    event.updated_at = now
    s.flush()

    record_event(
        s,
        actor=user,
        action="event.create" if is_new else "event.edit",
        entity_type="Event",
        entity_id=str(event.id),
        metadata={"title": event.title, "is_published": event.is_published},
    )
    return event


def set_event_published(s: "Session", event: "Event", published: bool, user: "User") -> "Event":
    event.is_published = published
    event.updated_at = datetime.utcnow()
    record_event(
        s,
        actor=user,
        action="event.publish" if published else "event.unpublish",
        entity_type="Event",
        entity_id=str(event.id),
        metadata={"title": event.title},
    )
    return event


def delete_event(s: "Session", event: "Event", user: "User") -> None:
    record_event(
        s,
        actor=user,
        action="event.delete",
        entity_type="Event",
        entity_id=str(event.id),
        metadata={"title": event.title},
    )
    s.delete(event)


# ---------- Registrations ----------
def validate_registration_payload(payload: dict) -> list[str]:
    errors = require_fields(payload, (("name", "Full name"), ("email", "Email")))
    email = clean(payload.get("email"))
    if email and not is_valid_email(email):
        errors.append("Please enter a valid email address.")
    return errors


def create_registration(s: "Session", event: "Event", payload: dict, now: datetime | None = None) -> "EventRegistration":
    from app.innovex.modules.events.models import EventRegistration

    if not is_registration_open(event, now):
        raise RegistrationClosed(f"Registration for {event.title} is closed.")

    reg = EventRegistration(
        event_id=event.id,
        name=(payload.get("name") or "").strip(),
        email=(payload.get("email") or "").strip().lower(),
        phone=clean(payload.get("phone")),
        college=clean(payload.get("college")),
        status="pending",
        created_at=datetime.utcnow(),
    )
    s.add(reg)
    s.flush()
    record_event(
        s,
        actor=None,
        action="event_registration.create",
        entity_type="EventRegistration",
        entity_id=str(reg.id),
        metadata={"event_id": event.id, "email": reg.email},
    )
    return reg


def list_registrations(s: "Session") -> list["EventRegistration"]:
    from app.innovex.modules.events.models import EventRegistration

    return s.query(EventRegistration).order_by(EventRegistration.created_at.desc(), EventRegistration.id.desc()).all()


def update_registration_status(s: "Session", reg: "EventRegistration", status: str, user: "User") -> "EventRegistration":
    if status not in REGISTRATION_STATUSES:
        raise ValueError(f"Invalid status. Must be one of: {', '.join(REGISTRATION_STATUSES)}")
    old = reg.status
    reg.status = status
    record_event(
        s,
        actor=user,
        action="event_registration.status",
        entity_type="EventRegistration",
        entity_id=str(reg.id),
        metadata={"old": old, "new": status},
    )
    return reg


def registration_export_rows(regs: list["EventRegistration"]) -> list[dict]:
    return [
        {
            "Name": r.name,
            "Email": r.email,
            "Phone": r.phone or "",
            "College": r.college or "",
            "Event": r.event.title if r.event else "",
            "Status": r.status,
            "Date": r.created_at.date().isoformat() if r.created_at else "",
        }
        for r in regs
    ]
