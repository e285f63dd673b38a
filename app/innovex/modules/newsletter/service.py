from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from app.innovex.audit import record_event
from app.innovex.utils import is_valid_email

if TYPE_CHECKING:
    from sqlalchemy.orm import Session
    from app.innovex.models import User
    from app.innovex.modules.newsletter.models import NewsletterSubscription


def validate_subscription_email(email: str | None) -> list[str]:
    if not (email or "").strip():
        return ["Email is required."]
    if not is_valid_email(email):
        return ["Please enter a valid email address."]
    return []


def subscribe(s: "Session", email: str) -> tuple["NewsletterSubscription", bool]:
    """
    Returns (subscription, created). An existing address is reactivated rather than duplicated.
    """
    from app.innovex.modules.newsletter.models import NewsletterSubscription

    email = email.strip().lower()
    sub = s.query(NewsletterSubscription).filter(NewsletterSubscription.email == email).one_or_none()
    if sub is not None:
        sub.is_active = True
        return sub, False
    sub = NewsletterSubscription(email=email, is_active=True, subscribed_at=datetime.utcnow())
    s.add(sub)
    s.flush()
    return sub, True


def list_subscriptions(s: "Session") -> list["NewsletterSubscription"]:
    from app.innovex.modules.newsletter.models import NewsletterSubscription

    return (
        s.query(NewsletterSubscription)
        .order_by(NewsletterSubscription.subscribed_at.desc(), NewsletterSubscription.id.desc())
        .all()
    )


def count_active(s: "Session") -> int:
    from app.innovex.modules.newsletter.models import NewsletterSubscription

    return s.query(NewsletterSubscription).filter(NewsletterSubscription.is_active.is_(True)).count()


def set_active(s: "Session", sub: "NewsletterSubscription", active: bool, user: "User") -> None:
    sub.is_active = active
    record_event(
        s,
        actor=user,
        action="newsletter.activate" if active else "newsletter.deactivate",
        entity_type="NewsletterSubscription",
        entity_id=str(sub.id),
        metadata={"email": sub.email},
    )


def subscription_export_rows(subs: list["NewsletterSubscription"]) -> list[dict]:
    return [
        {
            "Email": sub.email,
            "Status": "Active" if sub.is_active else "Inactive",
            "SubscribedOn": sub.subscribed_at.date().isoformat() if sub.subscribed_at else "",
        }
        for sub in subs
    ]
