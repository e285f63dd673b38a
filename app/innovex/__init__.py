import logging
import os
from datetime import timedelta

from flask import Flask, g, has_request_context, render_template, request, session
from dotenv import load_dotenv

from app.innovex.config import load_config
from app.innovex.db import init_db, teardown_db_session
from app.innovex.routes import bp as routes_bp
from app.innovex.auth import bp as auth_bp, load_current_user
from app.innovex.admin import bp as admin_bp
from app.innovex.notifications import bp as functions_bp
from app.innovex.modules.events.admin import bp as events_bp
from app.innovex.modules.applications.admin import bp as applications_bp
from app.innovex.modules.contacts.admin import bp as contacts_bp
from app.innovex.modules.newsletter.admin import bp as newsletter_bp
from app.innovex.modules.blog.admin import bp as blog_bp
from app.innovex.modules.products.admin import bp as products_bp
from app.innovex.modules.testimonials.admin import bp as testimonials_bp

# Endpoints that accept POSTs without the session CSRF token.
_CSRF_EXEMPT_PREFIXES = ("auth.", "functions.")

_S3_REQUIRED = ("S3_ENDPOINT", "S3_BUCKET", "S3_ACCESS_KEY_ID", "S3_SECRET_ACCESS_KEY")


def _check_production_config(app: Flask) -> None:
    """Refuse to boot production on sqlite or the default secret."""
    env = (app.config.get("ENV") or "").strip().lower()
    if env not in ("prod", "production"):
        return
    db_url = str(app.config.get("DATABASE_URL") or "").strip()
    if not db_url:
        raise RuntimeError("DATABASE_URL is required in production.")
    if db_url.startswith("sqlite"):
        raise RuntimeError("DATABASE_URL must be Postgres in production (not sqlite).")
    if str(app.config.get("SECRET_KEY") or "") in ("", "change-me"):
        raise RuntimeError("SECRET_KEY must be set to a strong value in production (not default).")
    if not app.config.get("RESEND_API_KEY"):
        app.logger.warning("RESEND_API_KEY is not set; application emails are disabled.")


def _dispose_engine_on_fork(app: Flask) -> None:
    # gunicorn --preload forks after create_app(); pooled connections must not cross the fork
    if not hasattr(os, "register_at_fork"):
        return

    def _after_fork_child() -> None:
        engine = app.extensions.get("sqlalchemy_engine")
        if engine:
            engine.dispose()
            app.logger.info("Disposed DB engine after fork (pid=%s)", os.getpid())

    os.register_at_fork(after_in_child=_after_fork_child)


def _check_storage(app: Flask) -> None:
    """Log (not raise) when the S3 bucket for uploads is misconfigured or unreachable."""
    if app.config.get("STORAGE_BACKEND") != "s3":
        return
    missing = [key for key in _S3_REQUIRED if not app.config.get(key)]
    if missing:
        app.logger.error("STORAGE CONFIG ERROR: Missing required S3 env vars: %s", ", ".join(missing))
        return

    from botocore.exceptions import BotoCoreError, ClientError

    from app.innovex.storage import S3Storage, storage_from_config

    storage = storage_from_config(app.config)
    if not isinstance(storage, S3Storage):
        return
    try:
        storage._client().head_bucket(Bucket=storage.bucket)
    except (BotoCoreError, ClientError) as e:
        app.logger.error("STORAGE CONFIG ERROR: Cannot access S3 bucket '%s': %s", storage.bucket, e)
        return
    app.logger.info("Storage health check PASSED: S3 bucket '%s' accessible", storage.bucket)


def create_app() -> Flask:
    load_dotenv()
    app = Flask(__name__, template_folder="templates", static_folder="static")
    app.config.from_mapping(load_config())
    app.config["PERMANENT_SESSION_LIFETIME"] = timedelta(hours=8)
    app.config["SESSION_REFRESH_EACH_REQUEST"] = True

    # CSRF protection (minimal)
    from app.innovex.security import ensure_csrf_token, validate_csrf

    @app.context_processor
    def _inject_csrf() -> dict:
        # Email bodies are also rendered from templates, sometimes outside a request.
        if not has_request_context():
            return {}
        return {"csrf_token": ensure_csrf_token()}

    @app.context_processor
    def _inject_user() -> dict:
        from app.innovex.rbac import is_admin

        user = getattr(g, "current_user", None)
        return {"current_user": user, "is_admin": is_admin(user)}

    @app.template_filter("dateformat")
    def _dateformat_filter(value, format: str = "%Y-%m-%d") -> str:
        if value is None:
            return "-"
        if hasattr(value, "strftime"):
            return value.strftime(format)
        return str(value)

    @app.before_request
    def _csrf_guard():
        if request.path.startswith(("/static/", "/health", "/healthz")):
            return None
        ensure_csrf_token()
        session.permanent = True
        if request.method in ("POST", "PUT", "PATCH", "DELETE"):
            if (request.endpoint or "").startswith(_CSRF_EXEMPT_PREFIXES):
                return None
            if not validate_csrf(request):
                return render_template("errors/400.html", message="CSRF token missing or invalid."), 400

    _check_production_config(app)
    init_db(app)
    _dispose_engine_on_fork(app)
    _check_storage(app)

    app.register_blueprint(routes_bp)
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(admin_bp, url_prefix="/admin")
    app.register_blueprint(functions_bp)
    app.register_blueprint(events_bp, url_prefix="/admin")
    app.register_blueprint(applications_bp, url_prefix="/admin")
    app.register_blueprint(contacts_bp, url_prefix="/admin")
    app.register_blueprint(newsletter_bp, url_prefix="/admin")
    app.register_blueprint(blog_bp, url_prefix="/admin")
    app.register_blueprint(products_bp, url_prefix="/admin")
    app.register_blueprint(testimonials_bp, url_prefix="/admin")

    app.before_request(load_current_user)
    app.teardown_appcontext(teardown_db_session)

    @app.errorhandler(500)
    def _err_500(e):  # type: ignore[no-redef]
        app.logger.exception("Unhandled 500 (request_id=%s)", getattr(g, "request_id", None))
        return render_template("errors/500.html"), 500

    @app.errorhandler(404)
    def _err_404(e):  # type: ignore[no-redef]
        return render_template("errors/404.html"), 404

    @app.errorhandler(403)
    def _err_403(e):  # type: ignore[no-redef]
        missing = getattr(g, "missing_role", None)
        if missing:
            app.logger.warning(
                "Forbidden: missing_role=%s path=%s request_id=%s",
                missing,
                request.path,
                getattr(g, "request_id", None),
            )
        return render_template("errors/403.html", missing_role=missing), 403

    @app.errorhandler(413)
    def _err_413(e):  # type: ignore[no-redef]
        from flask import flash, redirect, url_for

        flash("File too large. Please upload a file smaller than 5MB.", "danger")
        referrer = request.referrer
        if referrer and referrer.startswith(request.host_url):
            return redirect(referrer), 302
        return redirect(url_for("routes.index")), 302

    logging.getLogger(__name__).info("create_app() complete; app ready to serve")

    return app
