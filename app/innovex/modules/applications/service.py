from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from app.innovex.audit import record_event
from app.innovex.constants import APPLICATION_KINDS, APPLICATION_STATUSES
from app.innovex.utils import clean, is_valid_email, require_fields

if TYPE_CHECKING:
    from sqlalchemy.orm import Session
    from app.innovex.models import User
    from app.innovex.modules.applications.models import Application

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = (
    ("name", "Full name"),
    ("email", "Email"),
    ("phone", "Phone"),
    ("college", "College"),
    ("year_of_study", "Year of study"),
    ("position", "Position"),
)


def validate_application_payload(payload: dict) -> list[str]:
    errors = require_fields(payload, REQUIRED_FIELDS)
    email = clean(payload.get("email"))
    if email and not is_valid_email(email):
        errors.append("Please enter a valid email address.")
    portfolio = clean(payload.get("portfolio_url"))
    if portfolio and not portfolio.startswith(("http://", "https://")):
        errors.append("Portfolio URL must start with http:// or https://")
    return errors


def create_application(s: "Session", kind: str, payload: dict, resume_url: str | None = None) -> "Application":
    from app.innovex.modules.applications.models import Application

    if kind not in APPLICATION_KINDS:
        raise ValueError(f"Unknown application kind: {kind}")

    app_row = Application(
        kind=kind,
        name=(payload.get("name") or "").strip(),
        email=(payload.get("email") or "").strip().lower(),
        phone=(payload.get("phone") or "").strip(),
        college=(payload.get("college") or "").strip(),
        year_of_study=(payload.get("year_of_study") or "").strip(),
        position=(payload.get("position") or "").strip(),
        portfolio_url=clean(payload.get("portfolio_url")),
        resume_url=resume_url,
        cover_letter=clean(payload.get("cover_letter")),
        status="pending",
        created_at=datetime.utcnow(),
    )
    s.add(app_row)
    s.flush()
    record_event(
        s,
        actor=None,
        action="application.create",
        entity_type="Application",
        entity_id=str(app_row.id),
        metadata={"kind": kind, "position": app_row.position, "email": app_row.email},
    )
    return app_row


def notification_payload(app_row: "Application") -> dict:
    """Wire format of the notify-application function."""
    return {
        "type": app_row.kind,
        "applicantName": app_row.name,
        "applicantEmail": app_row.email,
        "position": app_row.position,
        "college": app_row.college,
        "phone": app_row.phone,
    }


def send_application_notification(app_row: "Application") -> bool:
    """Best effort: a failed email never fails the saved application."""
    from app.innovex.notifications import EmailError, notify_application

    try:
        notify_application(notification_payload(app_row))
    except EmailError as e:
        logger.warning("Email notification failed, but application %s was saved: %s", app_row.id, e)
        return False
    return True


def list_applications(s: "Session", kind: str) -> list["Application"]:
    from app.innovex.modules.applications.models import Application

    return (
        s.query(Application)
        .filter(Application.kind == kind)
        .order_by(Application.created_at.desc(), Application.id.desc())
        .all()
    )


def update_application_status(s: "Session", app_row: "Application", status: str, user: "User") -> "Application":
    if status not in APPLICATION_STATUSES:
        raise ValueError(f"Invalid status. Must be one of: {', '.join(APPLICATION_STATUSES)}")
    old = app_row.status
    app_row.status = status
    record_event(
        s,
        actor=user,
        action="application.status",
        entity_type="Application",
        entity_id=str(app_row.id),
        metadata={"old": old, "new": status, "kind": app_row.kind},
    )
    return app_row


def delete_application(s: "Session", app_row: "Application", user: "User") -> None:
    record_event(
        s,
        actor=user,
        action="application.delete",
        entity_type="Application",
        entity_id=str(app_row.id),
        metadata={"kind": app_row.kind, "email": app_row.email},
    )
    s.delete(app_row)


def application_export_rows(apps: list["Application"]) -> list[dict]:
    return [
        {
            "Name": a.name,
            "Email": a.email,
            "Phone": a.phone,
            "College": a.college,
            "Year": a.year_of_study,
            "Position": a.position,
            "Portfolio": a.portfolio_url or "",
            "Resume": a.resume_url or "",
            "Status": a.status,
            "AppliedOn": a.created_at.date().isoformat() if a.created_at else "",
        }
        for a in apps
    ]
