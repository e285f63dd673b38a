"""Tests for blog posts and products, public pages and admin forms."""
import pytest
from werkzeug.security import generate_password_hash

from app.innovex import create_app
from app.innovex.db import session_scope
from app.innovex.models import Base, User
from app.innovex.modules.blog.models import BlogPost
from app.innovex.modules.blog.service import resolve_slug, slugify, validate_post_payload
from app.innovex.modules.products.models import Product
from app.innovex.modules.products.service import parse_technologies
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


class TestSlugify:
    def test_spaces_become_dashes(self):
        assert slugify("Hello  World") == "hello-world"

    def test_punctuation_dropped(self):
        assert slugify("AI & You: 2025!") == "ai--you-2025"

    def test_only_symbols(self):
        assert slugify("!!!") == ""

    def test_typed_slug_is_normalised(self):
        assert resolve_slug({"title": "Ignored", "slug": "My First Post!"}) == "my-first-post"

    def test_blank_slug_falls_back_to_title(self):
        assert resolve_slug({"title": "Cloud Trends 2025", "slug": "  "}) == "cloud-trends-2025"


class TestParseTechnologies:
    def test_split_and_trim(self):
        assert parse_technologies("Python, React , ,AWS") == ["Python", "React", "AWS"]

    def test_empty(self):
        assert parse_technologies(None) == []


def test_sample_post_readable_while_nothing_published(client):
    r = client.get("/blog/prepare-first-hackathon")
    assert r.status_code == 200

    r = client.get("/blog/no-such-post")
    assert r.status_code == 404


def test_published_post_replaces_samples(app, client):
    client.post("/auth/login", data={"email": "admin@example.com", "password": "pw"})
    r = client.post(
        "/admin/blog/new",
        data={
            "csrf_token": "test-token",
            "title": "Our First Hackathon Recap",
            "content": "Forty teams, one weekend.",
            "category": "events",
            "is_published": "on",
        },
    )
    assert r.status_code == 302

    with session_scope(app) as s:
        post = s.query(BlogPost).one()
        assert post.slug == "our-first-hackathon-recap"
        assert post.published_at is not None

    r = client.get("/blog/our-first-hackathon-recap")
    assert r.status_code == 200
    assert b"Forty teams, one weekend." in r.data

    # Samples disappear once real posts exist
    r = client.get("/blog/prepare-first-hackathon")
    assert r.status_code == 404


def test_duplicate_slug_rejected(app, client):
    client.post("/auth/login", data={"email": "admin@example.com", "password": "pw"})
    data = {"csrf_token": "test-token", "title": "Same Title", "content": "x", "category": "news"}
    client.post("/admin/blog/new", data=data)
    r = client.post("/admin/blog/new", data=data, follow_redirects=True)
    assert b"already used by another post" in r.data
    with session_scope(app) as s:
        assert s.query(BlogPost).count() == 1


def test_unpublished_post_is_404(app, client):
    with session_scope(app) as s:
        s.add(BlogPost(title="Draft", slug="draft", content="wip", category="news", is_published=False))
    r = client.get("/blog/draft")
    assert r.status_code == 404


def test_products_fallback_filtered_by_category(client):
    r = client.get("/products?category=iot")
    assert r.status_code == 200
    assert b"Smart Campus IoT" in r.data
    assert b"CloudSync Dashboard" not in r.data


def test_admin_product_publish_flow(app, client):
    client.post("/auth/login", data={"email": "admin@example.com", "password": "pw"})
    r = client.post(
        "/admin/products/new",
        data={
            "csrf_token": "test-token",
            "name": "Campus Chatbot",
            "description": "Answers student questions.",
            "category": "ai",
            "technologies": "Python, Rasa",
        },
    )
    assert r.status_code == 302

    with session_scope(app) as s:
        product = s.query(Product).one()
        pid = product.id
        assert product.technologies == ["Python", "Rasa"]
        assert product.is_published is False

    # Unpublished rows don't count, so the public page still shows samples
    r = client.get("/products")
    assert b"Campus Chatbot" not in r.data
    assert b"AI Content Generator" in r.data

    r = client.post(f"/admin/products/{pid}/publish", data={"csrf_token": "test-token"})
    assert r.status_code == 302
    r = client.get("/products")
    assert b"Campus Chatbot" in r.data
    assert b"AI Content Generator" not in r.data


def test_typed_slug_is_stored_normalised(app, client):
    client.post("/auth/login", data={"email": "admin@example.com", "password": "pw"})
    r = client.post(
        "/admin/blog/new",
        data={
            "csrf_token": "test-token",
            "title": "Welcome",
            "slug": "My First Post!",
            "content": "Hello.",
            "category": "news",
            "is_published": "on",
        },
    )
    assert r.status_code == 302
    with session_scope(app) as s:
        assert s.query(BlogPost).one().slug == "my-first-post"
    assert client.get("/blog/my-first-post").status_code == 200


def test_symbol_only_slug_rejected(app):
    with session_scope(app) as s:
        errors = validate_post_payload(s, {"title": "Welcome", "slug": "!!!", "content": "x", "category": "news"})
    assert errors == ["Slug must contain letters or numbers."]
