import mimetypes

from flask import Blueprint, abort, current_app, flash, redirect, render_template, request, send_file, url_for

from app.innovex import fallback
from app.innovex.constants import PRODUCT_CATEGORIES
from app.innovex.db import db_session
from app.innovex.modules.applications.service import (
    create_application,
    send_application_notification,
    validate_application_payload,
)
from app.innovex.modules.blog.models import BlogPost
from app.innovex.modules.blog.service import list_published_posts
from app.innovex.modules.contacts.service import create_contact, validate_contact_payload
from app.innovex.modules.events.models import Event
from app.innovex.modules.events.service import (
    RegistrationClosed,
    create_registration,
    is_registration_open,
    list_published_events,
    validate_registration_payload,
)
from app.innovex.modules.newsletter.service import subscribe, validate_subscription_email
from app.innovex.modules.products.service import list_published_products
from app.innovex.modules.testimonials.service import list_public_testimonials
from app.innovex.storage import LocalStorage, StorageError, storage_from_config
from app.innovex.uploads import RESUME_CONTENT_TYPES, UploadRejected, store_request_file

bp = Blueprint("routes", __name__)

_APPLICATION_FIELDS = ("name", "email", "phone", "college", "year_of_study", "position", "portfolio_url", "cover_letter")


def _back(default_endpoint: str) -> str:
    """Redirect target for footer/inline forms: same-site referrer or a default page."""
    referrer = request.referrer
    if referrer and referrer.startswith(request.host_url):
        return referrer
    return url_for(default_endpoint)


@bp.get("/")
def index():
    s = db_session()
    testimonials = list_public_testimonials(s) or fallback.SAMPLE_TESTIMONIALS
    events = list_published_events(s)[:3]
    return render_template(
        "public/index.html",
        services=fallback.SERVICES_PREVIEW,
        events=events,
        sample_events=fallback.SAMPLE_EVENTS[:3] if not events else [],
        testimonials=testimonials,
    )


@bp.get("/services")
def services():
    return render_template("public/services.html", catalogue=fallback.SERVICE_CATALOGUE)


# ---------- Events ----------
@bp.get("/events")
def events():
    s = db_session()
    rows = list_published_events(s)
    return render_template(
        "public/events.html",
        events=rows,
        open_ids={e.id for e in rows if is_registration_open(e)},
        sample_events=fallback.SAMPLE_EVENTS if not rows else [],
        past_events=fallback.PAST_EVENTS,
    )


@bp.post("/events/<int:event_id>/register")
def event_register(event_id: int):
    s = db_session()
    event = s.get(Event, event_id)
    if not event or not event.is_published:
        abort(404)

    payload = {k: request.form.get(k) for k in ("name", "email", "phone", "college")}
    errors = validate_registration_payload(payload)
    if errors:
        for e in errors:
            flash(e, "danger")
        return redirect(url_for("routes.events"))

    try:
        create_registration(s, event, payload)
    except RegistrationClosed as e:
        flash(str(e), "danger")
        return redirect(url_for("routes.events"))
    s.commit()
    flash(f"You're registered for {event.title}!", "success")
    return redirect(url_for("routes.events"))


# ---------- Blog ----------
@bp.get("/blog")
def blog():
    s = db_session()
    posts = list_published_posts(s) or fallback.SAMPLE_POSTS
    category = (request.args.get("category") or "All").strip()
    categories = ["All"]
    for p in posts:
        c = p["category"] if isinstance(p, dict) else p.category
        if c not in categories:
            categories.append(c)
    return render_template(
        "public/blog.html",
        posts=fallback.filter_by_category(posts, category, all_value="All"),
        categories=categories,
        active_category=category,
    )


@bp.get("/blog/<slug>")
def blog_post(slug: str):
    s = db_session()
    post = s.query(BlogPost).filter(BlogPost.slug == slug, BlogPost.is_published.is_(True)).one_or_none()
    if post is None:
        # Sample posts are only listed while nothing is published.
        if not list_published_posts(s):
            post = next((p for p in fallback.SAMPLE_POSTS if p["slug"] == slug), None)
        if post is None:
            abort(404)
    return render_template("public/blog_post.html", post=post)


# ---------- Products / Gallery ----------
@bp.get("/products")
def products():
    s = db_session()
    rows = list_published_products(s) or fallback.SAMPLE_PRODUCTS
    category = (request.args.get("category") or "all").strip().lower()
    return render_template(
        "public/products.html",
        products=fallback.filter_by_category(rows, category),
        categories=PRODUCT_CATEGORIES,
        active_category=category,
    )


@bp.get("/gallery")
def gallery():
    category = (request.args.get("category") or "All").strip()
    return render_template(
        "public/gallery.html",
        items=fallback.filter_by_category(fallback.GALLERY_ITEMS, category, all_value="All"),
        categories=fallback.GALLERY_CATEGORIES,
        active_category=category,
    )


# ---------- Careers / Interns ----------
def _application_page(kind: str, template: str, positions: list[dict]):
    if request.method == "GET":
        return render_template(
            template,
            positions=positions,
            years=fallback.YEARS_OF_STUDY,
            selected_position=request.args.get("position") or "",
            form={},
        )

    payload = {k: request.form.get(k) for k in _APPLICATION_FIELDS}
    errors = validate_application_payload(payload)
    if errors:
        for e in errors:
            flash(e, "danger")
        return render_template(
            template,
            positions=positions,
            years=fallback.YEARS_OF_STUDY,
            selected_position=payload.get("position") or "",
            form=payload,
        ), 400

    resume_url = None
    if kind == "career":
        try:
            resume_url = store_request_file(
                storage_from_config(current_app.config),
                request.files.get("resume"),
                folder="resumes",
                allowed_types=RESUME_CONTENT_TYPES,
            )
        except UploadRejected as e:
            current_app.logger.info("Resume upload rejected: %s", e)
            flash(str(e), "danger")
            return render_template(
                template,
                positions=positions,
                years=fallback.YEARS_OF_STUDY,
                selected_position=payload.get("position") or "",
                form=payload,
            ), 400
        except StorageError as e:
            current_app.logger.error("Resume upload failed: %s", e)
            flash("Failed to upload resume. Please try again.", "danger")
            return redirect(request.path)

    s = db_session()
    app_row = create_application(s, kind, payload, resume_url=resume_url)
    s.commit()
    send_application_notification(app_row)
    flash("Application submitted! We'll review your application and get back to you soon.", "success")
    return redirect(request.path)


@bp.route("/careers", methods=["GET", "POST"])
def careers():
    return _application_page("career", "public/careers.html", fallback.CAREER_POSITIONS)


@bp.route("/interns", methods=["GET", "POST"])
def interns():
    return _application_page("internship", "public/interns.html", fallback.INTERNSHIP_POSITIONS)


# ---------- Contact / Newsletter ----------
@bp.route("/contact", methods=["GET", "POST"])
def contact():
    if request.method == "GET":
        return render_template("public/contact.html", info=fallback.CONTACT_INFO, form={})

    payload = {k: request.form.get(k) for k in ("name", "email", "subject", "message")}
    errors = validate_contact_payload(payload)
    if errors:
        for e in errors:
            flash(e, "danger")
        return render_template("public/contact.html", info=fallback.CONTACT_INFO, form=payload), 400

    s = db_session()
    create_contact(s, payload)
    s.commit()
    flash("Message sent! We'll get back to you as soon as possible.", "success")
    return redirect(url_for("routes.contact"))


@bp.post("/newsletter")
def newsletter_subscribe():
    email = request.form.get("email")
    errors = validate_subscription_email(email)
    if errors:
        for e in errors:
            flash(e, "danger")
        return redirect(_back("routes.index"))

    s = db_session()
    _sub, created = subscribe(s, email)
    s.commit()
    flash("Thanks for subscribing!" if created else "You're subscribed again. Welcome back!", "success")
    return redirect(_back("routes.index"))


# ---------- Uploads / health ----------
@bp.get("/uploads/<path:key>")
def uploaded_file(key: str):
    storage = storage_from_config(current_app.config)
    if not isinstance(storage, LocalStorage):
        return redirect(storage.public_url(key))
    try:
        if not storage.exists(key):
            abort(404)
        fobj = storage.open(key)
    except StorageError:
        abort(404)
    mimetype = mimetypes.guess_type(key)[0] or "application/octet-stream"
    return send_file(fobj, mimetype=mimetype, download_name=key.rsplit("/", 1)[-1])


@bp.get("/health")
def health():
    """Health check endpoint. Returns JSON."""
    return {"ok": True}


@bp.get("/healthz")
def healthz():
    """
    Fast health check for k8s/DO probes. No DB access, minimal overhead.
    """
    return "ok", 200
