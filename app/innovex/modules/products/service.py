from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from app.innovex.audit import record_event
from app.innovex.constants import PRODUCT_CATEGORIES
from app.innovex.utils import clean, parse_bool, require_fields

if TYPE_CHECKING:
    from sqlalchemy.orm import Session
    from app.innovex.models import User
    from app.innovex.modules.products.models import Product

_CATEGORY_KEYS = tuple(k for k, _ in PRODUCT_CATEGORIES)


def parse_technologies(raw: str | None) -> list[str]:
    """'Python, React , ,AWS' -> ['Python', 'React', 'AWS']"""
    return [t.strip() for t in (raw or "").split(",") if t.strip()]


def validate_product_payload(payload: dict) -> list[str]:
    errors = require_fields(payload, (("name", "Name"), ("description", "Description")))
    category = clean(payload.get("category")) or "ai"
    if category not in _CATEGORY_KEYS:
        errors.append(f"Invalid category. Must be one of: {', '.join(_CATEGORY_KEYS)}")
    for key, label in (("demo_url", "Demo URL"), ("github_url", "GitHub URL")):
        url = clean(payload.get(key))
        if url and not url.startswith(("http://", "https://")):
            errors.append(f"{label} must start with http:// or https://")
    return errors


def list_products(s: "Session") -> list["Product"]:
    from app.innovex.modules.products.models import Product

    return s.query(Product).order_by(Product.created_at.desc(), Product.id.desc()).all()


def list_published_products(s: "Session") -> list["Product"]:
    from app.innovex.modules.products.models import Product

    return (
        s.query(Product)
        .filter(Product.is_published.is_(True))
        .order_by(Product.is_featured.desc(), Product.created_at.desc())
        .all()
    )


def save_product(s: "Session", product: "Product | None", payload: dict, user: "User", image_url: str | None = None) -> "Product":
    """Insert when `product` is None, otherwise update the same row."""
    from app.innovex.modules.products.models import Product

    now = datetime.utcnow()
    is_new = product is None
    if product is None:
        product = Product(created_at=now)
        s.add(product)

    product.name = (payload.get("name") or "").strip()
    product.description = (payload.get("description") or "").strip()
    product.short_description = clean(payload.get("short_description"))
    product.category = clean(payload.get("category")) or "ai"
    product.technologies = parse_technologies(payload.get("technologies"))
    product.demo_url = clean(payload.get("demo_url"))
    product.github_url = clean(payload.get("github_url"))
    if image_url is not None:
        product.image_url = image_url
    elif parse_bool(payload.get("remove_image")):
        product.image_url = None
    product.is_published = parse_bool(payload.get("is_published"))
    product.is_featured = parse_bool(payload.get("is_featured"))
    product.updated_at = now
    s.flush()

    record_event(
        s,
        actor=user,
        action="product.create" if is_new else "product.edit",
        entity_type="Product",
        entity_id=str(product.id),
        metadata={"name": product.name, "is_published": product.is_published, "is_featured": product.is_featured},
    )
    return product


def set_product_flag(s: "Session", product: "Product", flag: str, value: bool, user: "User") -> None:
    if flag not in ("is_published", "is_featured"):
        raise ValueError(f"Unknown product flag: {flag}")
    setattr(product, flag, value)
    product.updated_at = datetime.utcnow()
    record_event(
        s,
        actor=user,
        action=f"product.{flag}",
        entity_type="Product",
        entity_id=str(product.id),
        metadata={"value": value},
    )


def delete_product(s: "Session", product: "Product", user: "User") -> None:
    record_event(
        s,
        actor=user,
        action="product.delete",
        entity_type="Product",
        entity_id=str(product.id),
        metadata={"name": product.name},
    )
    s.delete(product)
