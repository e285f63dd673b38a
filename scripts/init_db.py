"""
Seed the admin account (idempotent).

Creates ADMIN_EMAIL with ADMIN_PASSWORD when missing and makes sure it holds the
admin role row. Does NOT overwrite an existing user's password.

Usage:
  python scripts/init_db.py
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from werkzeug.security import generate_password_hash

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from scripts._db_utils import database_url, script_session  # noqa: E402


def seed_only(*, database_url_override: str | None = None) -> None:
    from app.innovex.constants import ROLE_ADMIN
    from app.innovex.models import User
    from app.innovex.rbac import set_user_role, user_role

    admin_email = (os.environ.get("ADMIN_EMAIL") or "admin@innovexarena.com").strip().lower()
    admin_password = os.environ.get("ADMIN_PASSWORD") or "change-me"

    db_url = database_url(database_url_override)

    with script_session(db_url) as s:
        user = s.query(User).filter(User.email == admin_email).one_or_none()
        if not user:
            user = User(email=admin_email, password_hash=generate_password_hash(admin_password), is_active=True)
            s.add(user)
            s.flush()
        if user_role(user) != ROLE_ADMIN:
            set_user_role(s, user, ROLE_ADMIN)

    print("Initialized database (seed_only).")
    print(f"Admin email: {admin_email}")
    print("Admin password: (from ADMIN_PASSWORD)")


def main() -> None:
    seed_only()


if __name__ == "__main__":
    main()
