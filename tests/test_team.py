"""Tests for team role management."""
import pytest
from werkzeug.security import generate_password_hash

from app.innovex import create_app
from app.innovex.db import session_scope
from app.innovex.models import AuditEvent, Base, User
from app.innovex.rbac import set_user_role, user_role


@pytest.fixture()
def app(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'test.db'}")
    monkeypatch.setenv("ENV", "test")
    monkeypatch.setenv("STORAGE_BACKEND", "local")
    for k in ("S3_ENDPOINT", "S3_REGION", "S3_BUCKET", "S3_ACCESS_KEY_ID", "S3_SECRET_ACCESS_KEY"):
        monkeypatch.delenv(k, raising=False)

    app = create_app()
    engine = app.extensions["sqlalchemy_engine"]
    Base.metadata.create_all(bind=engine)

    with session_scope(app) as s:
        admin = User(email="admin@example.com", password_hash=generate_password_hash("pw"), is_active=True)
        member = User(email="member@example.com", password_hash=generate_password_hash("pw"), is_active=True)
        s.add_all([admin, member])
        s.flush()
        set_user_role(s, admin, "admin")
    return app


@pytest.fixture()
def client(app):
    c = app.test_client()
    with c.session_transaction() as sess:
        sess["csrf_token"] = "test-token"
    c.post("/auth/login", data={"email": "admin@example.com", "password": "pw"})
    return c


def _user(s, email):
    return s.query(User).filter(User.email == email).one()


def _role_of(app, email):
    with session_scope(app) as s:
        return user_role(_user(s, email))


def test_set_user_role_upserts_single_row(app):
    with session_scope(app) as s:
        u = _user(s, "member@example.com")
        assert set_user_role(s, u, "moderator") is None
        assert set_user_role(s, u, "user") == "moderator"
    assert _role_of(app, "member@example.com") == "user"


def test_set_user_role_rejects_unknown_role(app):
    with session_scope(app) as s:
        with pytest.raises(ValueError):
            set_user_role(s, _user(s, "member@example.com"), "owner")


def test_team_page_lists_users(client):
    r = client.get("/admin/team")
    assert r.status_code == 200
    assert b"member@example.com" in r.data


def test_grant_and_remove_role(app, client):
    with session_scope(app) as s:
        member_id = _user(s, "member@example.com").id

    r = client.post(f"/admin/team/{member_id}/role", data={"csrf_token": "test-token", "role": "moderator"}, follow_redirects=True)
    assert r.status_code == 200
    assert b"member@example.com is now moderator." in r.data
    assert _role_of(app, "member@example.com") == "moderator"

    r = client.post(f"/admin/team/{member_id}/role", data={"csrf_token": "test-token", "role": "remove"}, follow_redirects=True)
    assert b"Role removed for member@example.com." in r.data
    assert _role_of(app, "member@example.com") is None

    with session_scope(app) as s:
        actions = [e.action for e in s.query(AuditEvent).filter(AuditEvent.entity_type == "User").all()]
    assert "user.role_set" in actions
    assert "user.role_remove" in actions


def test_invalid_role_is_rejected(app, client):
    with session_scope(app) as s:
        member_id = _user(s, "member@example.com").id
    r = client.post(f"/admin/team/{member_id}/role", data={"csrf_token": "test-token", "role": "owner"}, follow_redirects=True)
    assert b"Invalid role." in r.data
    assert _role_of(app, "member@example.com") is None


def test_admin_cannot_demote_self(app, client):
    with session_scope(app) as s:
        admin_id = _user(s, "admin@example.com").id
    r = client.post(f"/admin/team/{admin_id}/role", data={"csrf_token": "test-token", "role": "user"}, follow_redirects=True)
    assert b"You cannot remove your own admin role." in r.data
    assert _role_of(app, "admin@example.com") == "admin"
