#!/usr/bin/env python3
"""Set or remove a user's role (idempotent).

Usage:
  python scripts/set_role.py --email someone@example.com --role admin
  python scripts/set_role.py --email someone@example.com --role remove
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from scripts._db_utils import database_url, script_session  # noqa: E402


def main() -> None:
    from app.innovex.constants import ROLES
    from app.innovex.models import User
    from app.innovex.rbac import set_user_role

    parser = argparse.ArgumentParser()
    parser.add_argument("--email", required=True, help="User email")
    parser.add_argument("--role", required=True, choices=[*ROLES, "remove"])
    args = parser.parse_args()

    role = None if args.role == "remove" else args.role
    with script_session(database_url()) as s:
        user = s.query(User).filter(User.email.ilike(args.email.strip())).one_or_none()
        if not user:
            print(f"User not found: {args.email}")
            sys.exit(1)
        previous = set_user_role(s, user, role)

    if role is None:
        print(f"Role removed from {args.email} (was: {previous or 'none'})")
    else:
        print(f"{args.email}: {previous or 'none'} -> {role}")


if __name__ == "__main__":
    main()
