from __future__ import annotations

from flask import Blueprint, abort, current_app, flash, g, redirect, render_template, request, url_for

from app.innovex.constants import BLOG_CATEGORIES
from app.innovex.db import db_session
from app.innovex.models import User
from app.innovex.modules.blog.models import BlogPost
from app.innovex.modules.blog.service import delete_post, list_posts, save_post, set_post_published, validate_post_payload
from app.innovex.rbac import require_admin
from app.innovex.storage import StorageError, storage_from_config
from app.innovex.uploads import IMAGE_CONTENT_TYPES, UploadRejected, store_request_file

bp = Blueprint("blog_admin", __name__)


def _current_user() -> User:
    u = getattr(g, "current_user", None)
    if not u:
        raise RuntimeError("No current user")
    return u


@bp.get("/blog")
@require_admin
def posts_list():
    s = db_session()
    return render_template("admin/blog/list.html", posts=list_posts(s), active_tab="blog")


@bp.get("/blog/new")
@require_admin
def posts_new_get():
    return render_template("admin/blog/form.html", post=None, categories=BLOG_CATEGORIES, active_tab="blog")


@bp.get("/blog/<int:post_id>/edit")
@require_admin
def posts_edit_get(post_id: int):
    s = db_session()
    post = s.get(BlogPost, post_id)
    if not post:
        abort(404)
    return render_template("admin/blog/form.html", post=post, categories=BLOG_CATEGORIES, active_tab="blog")


@bp.post("/blog/new", defaults={"post_id": None})
@bp.post("/blog/<int:post_id>/edit")
@require_admin
def posts_save(post_id: int | None):
    s = db_session()
    post = None
    if post_id is not None:
        post = s.get(BlogPost, post_id)
        if not post:
            abort(404)
    back = url_for("blog_admin.posts_edit_get", post_id=post_id) if post_id else url_for("blog_admin.posts_new_get")

    payload = {
        "title": request.form.get("title"),
        "slug": request.form.get("slug"),
        "content": request.form.get("content"),
        "excerpt": request.form.get("excerpt"),
        "category": request.form.get("category"),
        "is_published": request.form.get("is_published"),
        "remove_image": request.form.get("remove_image"),
    }
    errors = validate_post_payload(s, payload, post_id=post_id)
    if errors:
        for e in errors:
            flash(e, "danger")
        return redirect(back)

    try:
        cover_image = store_request_file(
            storage_from_config(current_app.config),
            request.files.get("cover_image"),
            folder="blog",
            allowed_types=IMAGE_CONTENT_TYPES,
        )
    except UploadRejected as e:
        flash(str(e), "danger")
        return redirect(back)
    except StorageError as e:
        current_app.logger.error("Image upload failed: %s", e)
        flash("Failed to upload image. Please try again.", "danger")
        return redirect(back)

    save_post(s, post, payload, _current_user(), cover_image=cover_image)
    s.commit()
    flash("Post updated." if post_id else "Post created.", "success")
    return redirect(url_for("blog_admin.posts_list"))


@bp.post("/blog/<int:post_id>/publish")
@require_admin
def posts_toggle_publish(post_id: int):
    s = db_session()
    post = s.get(BlogPost, post_id)
    if not post:
        abort(404)
    set_post_published(s, post, not post.is_published, _current_user())
    s.commit()
    flash("Post published." if post.is_published else "Post moved to draft.", "success")
    return redirect(url_for("blog_admin.posts_list"))


@bp.post("/blog/<int:post_id>/delete")
@require_admin
def posts_delete(post_id: int):
    s = db_session()
    post = s.get(BlogPost, post_id)
    if not post:
        abort(404)
    delete_post(s, post, _current_user())
    s.commit()
    flash("Post deleted.", "success")
    return redirect(url_for("blog_admin.posts_list"))
