from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from app.innovex.audit import record_event
from app.innovex.utils import clean, is_valid_email, require_fields

if TYPE_CHECKING:
    from sqlalchemy.orm import Session
    from app.innovex.models import User
    from app.innovex.modules.contacts.models import ContactSubmission


def validate_contact_payload(payload: dict) -> list[str]:
    errors = require_fields(
        payload,
        (("name", "Full name"), ("email", "Email"), ("subject", "Subject"), ("message", "Message")),
    )
    email = clean(payload.get("email"))
    if email and not is_valid_email(email):
        errors.append("Please enter a valid email address.")
    return errors


def create_contact(s: "Session", payload: dict) -> "ContactSubmission":
    from app.innovex.modules.contacts.models import ContactSubmission

    c = ContactSubmission(
        name=(payload.get("name") or "").strip(),
        email=(payload.get("email") or "").strip().lower(),
        subject=(payload.get("subject") or "").strip(),
        message=(payload.get("message") or "").strip(),
        is_read=False,
        created_at=datetime.utcnow(),
    )
    s.add(c)
    s.flush()
    return c


def list_contacts(s: "Session") -> list["ContactSubmission"]:
    from app.innovex.modules.contacts.models import ContactSubmission

    return s.query(ContactSubmission).order_by(ContactSubmission.created_at.desc(), ContactSubmission.id.desc()).all()


def count_unread(s: "Session") -> int:
    from app.innovex.modules.contacts.models import ContactSubmission

    return s.query(ContactSubmission).filter(ContactSubmission.is_read.is_(False)).count()


def mark_read(s: "Session", c: "ContactSubmission", user: "User") -> None:
    c.is_read = True
    record_event(s, actor=user, action="contact.mark_read", entity_type="ContactSubmission", entity_id=str(c.id))


def delete_contact(s: "Session", c: "ContactSubmission", user: "User") -> None:
    record_event(
        s,
        actor=user,
        action="contact.delete",
        entity_type="ContactSubmission",
        entity_id=str(c.id),
        metadata={"email": c.email, "subject": c.subject},
    )
    s.delete(c)
