from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import abort, g, redirect, request, url_for

from app.innovex.constants import ROLE_ADMIN
from app.innovex.models import User


def user_role(user: User | None) -> str | None:
    if not user or user.role_row is None:
        return None
    return user.role_row.role


def is_admin(user: User | None) -> bool:
    if not user or not user.is_active:
        return False
    return user_role(user) == ROLE_ADMIN


def require_admin(fn: Callable[..., Any]) -> Callable[..., Any]:
    @wraps(fn)
    def wrapped(*args: Any, **kwargs: Any):
        user: User | None = getattr(g, "current_user", None)
        # No session -> login page
        if not user or not user.is_active:
            nxt = request.full_path or request.path
            # Avoid trailing '?' from full_path when there is no query string.
            if nxt.endswith("?"):
                nxt = nxt[:-1]
            return redirect(url_for("auth.login_get", next=nxt))
        # Session without an admin role row -> Access Denied
        if not is_admin(user):
            g.missing_role = ROLE_ADMIN
            abort(403)
        return fn(*args, **kwargs)

    return wrapped


def set_user_role(s, user: User, role: str | None) -> str | None:
    """
    Upsert the single role row for `user` (update if present, insert otherwise).
    role=None removes the row. Returns the previous role.
    """
    from app.innovex.constants import ROLES
    from app.innovex.models import UserRole

    if role is not None and role not in ROLES:
        raise ValueError(f"Invalid role: {role}")
    previous = user_role(user)
    if role is None:
        if user.role_row is not None:
            s.delete(user.role_row)
            user.role_row = None
    elif user.role_row is None:
        user.role_row = UserRole(role=role)
    else:
        user.role_row.role = role
    s.flush()
    return previous
