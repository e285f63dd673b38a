"""Tests for testimonials: public filter, home page fallback and admin CRUD."""
import pytest
from werkzeug.security import generate_password_hash

from app.innovex import create_app
from app.innovex.db import session_scope
from app.innovex.models import Base, User
from app.innovex.modules.testimonials.models import Testimonial
from app.innovex.modules.testimonials.service import list_public_testimonials, validate_testimonial_payload
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


def _login(client):
    client.post("/auth/login", data={"email": "admin@example.com", "password": "pw"})


def _add(app, name, *, approved, featured):
    with session_scope(app) as s:
        t = Testimonial(name=name, role="Student", content=f"{name} loved it", is_approved=approved, is_featured=featured)
        s.add(t)
        s.flush()
        return t.id


class TestValidateTestimonialPayload:
    def test_required_fields(self):
        errors = validate_testimonial_payload({})
        assert errors == ["Name is required.", "Role is required.", "Content is required."]

    def test_rating_out_of_range(self):
        errors = validate_testimonial_payload({"name": "A", "role": "B", "content": "C", "rating": "6"})
        assert errors == ["Rating must be between 1 and 5."]

    def test_rating_not_a_number(self):
        errors = validate_testimonial_payload({"name": "A", "role": "B", "content": "C", "rating": "five"})
        assert errors == ["Rating must be a whole number."]


def test_public_list_requires_approved_and_featured(app):
    _add(app, "Both", approved=True, featured=True)
    _add(app, "ApprovedOnly", approved=True, featured=False)
    _add(app, "FeaturedOnly", approved=False, featured=True)
    _add(app, "Neither", approved=False, featured=False)

    with session_scope(app) as s:
        names = [t.name for t in list_public_testimonials(s)]
    assert names == ["Both"]


def test_public_list_is_capped(app):
    for i in range(8):
        _add(app, f"Person {i}", approved=True, featured=True)
    with session_scope(app) as s:
        assert len(list_public_testimonials(s)) == 6


def test_home_falls_back_to_samples(app, client):
    _add(app, "Hidden Person", approved=True, featured=False)
    r = client.get("/")
    assert r.status_code == 200
    assert b"Priya Sharma" in r.data
    assert b"Hidden Person" not in r.data


def test_home_shows_public_testimonials(app, client):
    _add(app, "Visible Person", approved=True, featured=True)
    r = client.get("/")
    assert r.status_code == 200
    assert b"Visible Person" in r.data
    assert b"Priya Sharma" not in r.data


def test_admin_create_edit_toggle_delete(app, client):
    _login(client)

    r = client.post(
        "/admin/testimonials/new",
        data={
            "csrf_token": "test-token",
            "name": "Kiran",
            "role": "Intern",
            "content": "Great mentors",
            "rating": "4",
        },
    )
    assert r.status_code == 302

    with session_scope(app) as s:
        rows = s.query(Testimonial).all()
        assert len(rows) == 1
        tid = rows[0].id
        assert rows[0].rating == 4
        assert rows[0].is_approved is False

    r = client.post(
        f"/admin/testimonials/{tid}/edit",
        data={
            "csrf_token": "test-token",
            "name": "Kiran Rao",
            "role": "Intern",
            "content": "Great mentors",
            "rating": "5",
            "is_approved": "on",
        },
    )
    assert r.status_code == 302
    with session_scope(app) as s:
        rows = s.query(Testimonial).all()
        assert [(t.id, t.name, t.is_approved, t.is_featured) for t in rows] == [(tid, "Kiran Rao", True, False)]

    r = client.post(f"/admin/testimonials/{tid}/feature", data={"csrf_token": "test-token"})
    assert r.status_code == 302
    r = client.get("/")
    assert b"Kiran Rao" in r.data

    r = client.post(f"/admin/testimonials/{tid}/approve", data={"csrf_token": "test-token"}, follow_redirects=True)
    assert b"Testimonial unapproved" in r.data

    r = client.post(f"/admin/testimonials/{tid}/delete", data={"csrf_token": "test-token"}, follow_redirects=True)
    assert r.status_code == 200
    assert b"Testimonial deleted" in r.data
    with session_scope(app) as s:
        assert s.query(Testimonial).count() == 0


def test_admin_rejects_invalid_testimonial(app, client):
    _login(client)
    r = client.post(
        "/admin/testimonials/new",
        data={"csrf_token": "test-token", "name": "Kiran", "role": "Intern", "content": "", "rating": "5"},
        follow_redirects=True,
    )
    assert r.status_code == 200
    assert b"Content is required." in r.data
    with session_scope(app) as s:
        assert s.query(Testimonial).count() == 0
