from __future__ import annotations

import re
from datetime import datetime
from typing import TYPE_CHECKING

from app.innovex.audit import record_event
from app.innovex.constants import BLOG_CATEGORIES
from app.innovex.utils import clean, parse_bool, require_fields

if TYPE_CHECKING:
    from sqlalchemy.orm import Session
    from app.innovex.models import User
    from app.innovex.modules.blog.models import BlogPost

_CATEGORY_KEYS = tuple(k for k, _ in BLOG_CATEGORIES)


def slugify(title: str) -> str:
    """Lowercase, whitespace runs to '-', then drop anything outside [a-z0-9-]."""
    s = re.sub(r"\s+", "-", title.strip().lower())
    return re.sub(r"[^a-z0-9-]", "", s)


def resolve_slug(payload: dict) -> str:
    """Typed slugs get the same normalisation as ones derived from the title."""
    return slugify(clean(payload.get("slug")) or payload.get("title") or "")


def validate_post_payload(s: "Session", payload: dict, post_id: int | None = None) -> list[str]:
    from app.innovex.modules.blog.models import BlogPost

    errors = require_fields(payload, (("title", "Title"), ("content", "Content")))
    category = clean(payload.get("category")) or "news"
    if category not in _CATEGORY_KEYS:
        errors.append(f"Invalid category. Must be one of: {', '.join(_CATEGORY_KEYS)}")

    slug = resolve_slug(payload)
    if not slug and clean(payload.get("slug")):
        errors.append("Slug must contain letters or numbers.")
    elif not slug and clean(payload.get("title")):
        errors.append("Slug could not be derived from the title; please enter one.")
    if slug:
        q = s.query(BlogPost).filter(BlogPost.slug == slug)
        if post_id is not None:
            q = q.filter(BlogPost.id != post_id)
        if q.first() is not None:
            errors.append(f"Slug '{slug}' is already used by another post.")
    return errors


def list_posts(s: "Session") -> list["BlogPost"]:
    from app.innovex.modules.blog.models import BlogPost

    return s.query(BlogPost).order_by(BlogPost.created_at.desc(), BlogPost.id.desc()).all()


def list_published_posts(s: "Session") -> list["BlogPost"]:
    from app.innovex.modules.blog.models import BlogPost

    return (
        s.query(BlogPost)
        .filter(BlogPost.is_published.is_(True))
        .order_by(BlogPost.published_at.desc(), BlogPost.id.desc())
        .all()
    )


def _apply_published(post: "BlogPost", published: bool) -> None:
    if published and not post.published_at:
        post.published_at = datetime.utcnow()
    if not published:
        post.published_at = None
    post.is_published = published


def save_post(s: "Session", post: "BlogPost | None", payload: dict, user: "User", cover_image: str | None = None) -> "BlogPost":
    """Insert when `post` is None, otherwise update the same row."""
    from app.innovex.modules.blog.models import BlogPost

    now = datetime.utcnow()
    is_new = post is None
    if post is None:
        post = BlogPost(created_at=now)
        s.add(post)

    post.title = (payload.get("title") or "").strip()
    post.slug = resolve_slug(payload)
    post.content = (payload.get("content") or "").strip()
    post.excerpt = clean(payload.get("excerpt"))
    post.category = clean(payload.get("category")) or "news"
    if cover_image is not None:
        post.cover_image = cover_image
    elif parse_bool(payload.get("remove_image")):
        post.cover_image = None
    _apply_published(post, parse_bool(payload.get("is_published")))
    post.updated_at = now
    s.flush()

    record_event(
        s,
        actor=user,
        action="blog_post.create" if is_new else "blog_post.edit",
        entity_type="BlogPost",
        entity_id=str(post.id),
        metadata={"title": post.title, "slug": post.slug, "is_published": post.is_published},
    )
    return post


def set_post_published(s: "Session", post: "BlogPost", published: bool, user: "User") -> None:
    _apply_published(post, published)
    post.updated_at = datetime.utcnow()
    record_event(
        s,
        actor=user,
        action="blog_post.publish" if published else "blog_post.unpublish",
        entity_type="BlogPost",
        entity_id=str(post.id),
        metadata={"slug": post.slug},
    )


def delete_post(s: "Session", post: "BlogPost", user: "User") -> None:
    record_event(
        s,
        actor=user,
        action="blog_post.delete",
        entity_type="BlogPost",
        entity_id=str(post.id),
        metadata={"title": post.title, "slug": post.slug},
    )
    s.delete(post)
