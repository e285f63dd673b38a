"""Shared helpers for maintenance scripts that run outside the Flask app."""

from __future__ import annotations

import os
import sys
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

DEFAULT_DATABASE_URL = "sqlite:///innovex.db"


def database_url(override: str | None = None) -> str:
    return (override or os.environ.get("DATABASE_URL") or DEFAULT_DATABASE_URL).strip()


@contextmanager
def script_session(db_url: str):
    engine = create_engine(db_url, future=True, pool_pre_ping=True)
    sm = sessionmaker(bind=engine, class_=Session, autoflush=False, expire_on_commit=False)
    s: Session = sm()
    try:
        yield s
        s.commit()
    except Exception:
        s.rollback()
        raise
    finally:
        s.close()
        engine.dispose()
