"""Tests for the contact form and newsletter subscriptions."""
import pytest
from werkzeug.security import generate_password_hash

from app.innovex import create_app
from app.innovex.db import session_scope
from app.innovex.models import Base, User
from app.innovex.modules.contacts.models import ContactSubmission
from app.innovex.modules.newsletter.models import NewsletterSubscription
from app.innovex.modules.newsletter.service import validate_subscription_email
from app.innovex.rbac import set_user_role


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
        u = User(email="admin@example.com", password_hash=generate_password_hash("pw"), is_active=True)
        s.add(u)
        s.flush()
        set_user_role(s, u, "admin")
    return app


@pytest.fixture()
def client(app):
    c = app.test_client()
    with c.session_transaction() as sess:
        sess["csrf_token"] = "test-token"
    return c


class TestValidateSubscriptionEmail:
    def test_blank(self):
        assert validate_subscription_email("  ") == ["Email is required."]

    def test_invalid(self):
        assert validate_subscription_email("nobody") == ["Please enter a valid email address."]

    def test_valid(self):
        assert validate_subscription_email("a@example.com") == []


def test_contact_message_stored(app, client):
    r = client.post(
        "/contact",
        data={
            "csrf_token": "test-token",
            "name": "Meera",
            "email": "Meera@Example.com",
            "subject": "Workshop for our college",
            "message": "Can you run an AI workshop in March?",
        },
        follow_redirects=True,
    )
    assert r.status_code == 200
    assert b"Message sent!" in r.data

    with session_scope(app) as s:
        rows = s.query(ContactSubmission).all()
        assert len(rows) == 1
        assert rows[0].email == "meera@example.com"
        assert rows[0].is_read is False


def test_contact_requires_all_fields(app, client):
    r = client.post("/contact", data={"csrf_token": "test-token", "name": "Meera", "email": "meera@example.com"})
    assert r.status_code == 400
    assert b"Subject is required." in r.data
    with session_scope(app) as s:
        assert s.query(ContactSubmission).count() == 0


def test_admin_marks_message_read(app, client):
    client.post(
        "/contact",
        data={"csrf_token": "test-token", "name": "M", "email": "m@example.com", "subject": "S", "message": "Hi"},
    )
    client.post("/auth/login", data={"email": "admin@example.com", "password": "pw"})
    with session_scope(app) as s:
        cid = s.query(ContactSubmission).one().id

    r = client.post(f"/admin/messages/{cid}/read", data={"csrf_token": "test-token"})
    assert r.status_code == 302
    with session_scope(app) as s:
        assert s.get(ContactSubmission, cid).is_read is True


def test_newsletter_subscribe_and_resubscribe(app, client):
    r = client.post("/newsletter", data={"csrf_token": "test-token", "email": "Fan@Example.com"}, follow_redirects=True)
    assert r.status_code == 200
    assert b"Thanks for subscribing!" in r.data

    with session_scope(app) as s:
        sub = s.query(NewsletterSubscription).one()
        sub.is_active = False

    r = client.post("/newsletter", data={"csrf_token": "test-token", "email": "fan@example.com"}, follow_redirects=True)
    assert r.status_code == 200
    assert b"Welcome back!" in r.data

    with session_scope(app) as s:
        rows = s.query(NewsletterSubscription).all()
        assert [(sub.email, sub.is_active) for sub in rows] == [("fan@example.com", True)]


def test_newsletter_rejects_bad_email(app, client):
    r = client.post("/newsletter", data={"csrf_token": "test-token", "email": "nope"}, follow_redirects=True)
    assert r.status_code == 200
    assert b"Please enter a valid email address." in r.data
    with session_scope(app) as s:
        assert s.query(NewsletterSubscription).count() == 0


def test_newsletter_export(app, client):
    client.post("/newsletter", data={"csrf_token": "test-token", "email": "fan@example.com"})
    client.post("/auth/login", data={"email": "admin@example.com", "password": "pw"})
    r = client.get("/admin/newsletter/export")
    assert r.status_code == 200
    lines = r.data.decode("utf-8").splitlines()
    assert lines[0] == "Email,Status,SubscribedOn"
    assert lines[1].startswith("fan@example.com,Active,")
