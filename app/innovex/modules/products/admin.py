from __future__ import annotations

from flask import Blueprint, abort, current_app, flash, g, redirect, render_template, request, url_for

from app.innovex.constants import PRODUCT_CATEGORIES
from app.innovex.db import db_session
from app.innovex.models import User
from app.innovex.modules.products.models import Product
from app.innovex.modules.products.service import (
    delete_product,
    list_products,
    save_product,
    set_product_flag,
    validate_product_payload,
)
from app.innovex.rbac import require_admin
from app.innovex.storage import StorageError, storage_from_config
from app.innovex.uploads import IMAGE_CONTENT_TYPES, UploadRejected, store_request_file

bp = Blueprint("products_admin", __name__)


def _current_user() -> User:
    u = getattr(g, "current_user", None)
    if not u:
        raise RuntimeError("No current user")
    return u


@bp.get("/products")
@require_admin
def products_list():
    s = db_session()
    return render_template("admin/products/list.html", products=list_products(s), active_tab="products")


@bp.get("/products/new")
@require_admin
def products_new_get():
    return render_template("admin/products/form.html", product=None, categories=PRODUCT_CATEGORIES, active_tab="products")


@bp.get("/products/<int:product_id>/edit")
@require_admin
def products_edit_get(product_id: int):
    s = db_session()
    product = s.get(Product, product_id)
    if not product:
        abort(404)
    return render_template("admin/products/form.html", product=product, categories=PRODUCT_CATEGORIES, active_tab="products")


@bp.post("/products/new", defaults={"product_id": None})
@bp.post("/products/<int:product_id>/edit")
@require_admin
def products_save(product_id: int | None):
    s = db_session()
    product = None
    if product_id is not None:
        product = s.get(Product, product_id)
        if not product:
            abort(404)
    back = (
        url_for("products_admin.products_edit_get", product_id=product_id)
        if product_id
        else url_for("products_admin.products_new_get")
    )

    payload = {
        "name": request.form.get("name"),
        "description": request.form.get("description"),
        "short_description": request.form.get("short_description"),
        "category": request.form.get("category"),
        "technologies": request.form.get("technologies"),
        "demo_url": request.form.get("demo_url"),
        "github_url": request.form.get("github_url"),
        "is_published": request.form.get("is_published"),
        "is_featured": request.form.get("is_featured"),
        "remove_image": request.form.get("remove_image"),
    }
    errors = validate_product_payload(payload)
    if errors:
        for e in errors:
            flash(e, "danger")
        return redirect(back)

    try:
        image_url = store_request_file(
            storage_from_config(current_app.config),
            request.files.get("image"),
            folder="products",
            allowed_types=IMAGE_CONTENT_TYPES,
        )
    except UploadRejected as e:
        flash(str(e), "danger")
        return redirect(back)
    except StorageError as e:
        current_app.logger.error("Image upload failed: %s", e)
        flash("Failed to upload image. Please try again.", "danger")
        return redirect(back)

    save_product(s, product, payload, _current_user(), image_url=image_url)
    s.commit()
    flash("Product updated." if product_id else "Product created.", "success")
    return redirect(url_for("products_admin.products_list"))


@bp.post("/products/<int:product_id>/<any(publish, feature):flag>")
@require_admin
def products_toggle(product_id: int, flag: str):
    s = db_session()
    product = s.get(Product, product_id)
    if not product:
        abort(404)
    attr = "is_published" if flag == "publish" else "is_featured"
    set_product_flag(s, product, attr, not getattr(product, attr), _current_user())
    s.commit()
    flash("Product updated.", "success")
    return redirect(url_for("products_admin.products_list"))


@bp.post("/products/<int:product_id>/delete")
@require_admin
def products_delete(product_id: int):
    s = db_session()
    product = s.get(Product, product_id)
    if not product:
        abort(404)
    delete_product(s, product, _current_user())
    s.commit()
    flash("Product deleted.", "success")
    return redirect(url_for("products_admin.products_list"))
