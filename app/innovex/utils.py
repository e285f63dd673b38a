from __future__ import annotations

import re
from datetime import datetime

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def clean(value: object) -> str | None:
    """Strip a form value; empty becomes None."""
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def is_valid_email(value: str | None) -> bool:
    return bool(value and _EMAIL_RE.match(value.strip()))


def parse_bool(value: object) -> bool:
    """HTML checkbox semantics: present and not an explicit false."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in ("1", "on", "true", "yes")


def parse_int(value: object) -> int | None:
    s = clean(value)
    if s is None:
        return None
    return int(s)


def parse_datetime(value: object) -> datetime | None:
    """Accepts `YYYY-MM-DD`, `YYYY-MM-DDTHH:MM` (datetime-local) or with seconds."""
    s = clean(value)
    if s is None:
        return None
    return datetime.fromisoformat(s)


def require_fields(payload: dict, fields: tuple[tuple[str, str], ...]) -> list[str]:
    """Required-field check; `fields` is (key, label) pairs."""
    return [f"{label} is required." for key, label in fields if not clean(payload.get(key))]
