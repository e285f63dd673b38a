import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    secret_key: str
    env: str
    database_url: str

    storage_backend: str
    storage_public_base_url: str
    s3_endpoint: str
    s3_region: str
    s3_bucket: str
    s3_access_key_id: str
    s3_secret_access_key: str

    resend_api_key: str
    mail_from: str
    admin_notify_email: str


def _getenv(name: str, default: str = "") -> str:
    return (os.environ.get(name) or default).strip()


def load_settings() -> Settings:
    return Settings(
        secret_key=_getenv("SECRET_KEY", "change-me"),
        env=_getenv("ENV", "development"),
        database_url=_getenv("DATABASE_URL", "sqlite:///innovex.db"),
        storage_backend=_getenv("STORAGE_BACKEND", "local"),
        storage_public_base_url=_getenv("STORAGE_PUBLIC_BASE_URL", ""),
        s3_endpoint=_getenv("S3_ENDPOINT", ""),
        s3_region=_getenv("S3_REGION", "nyc3"),
        s3_bucket=_getenv("S3_BUCKET", ""),
        s3_access_key_id=_getenv("S3_ACCESS_KEY_ID", ""),
        s3_secret_access_key=_getenv("S3_SECRET_ACCESS_KEY", ""),
        resend_api_key=_getenv("RESEND_API_KEY", ""),
        mail_from=_getenv("MAIL_FROM", "Innovex Arena <onboarding@resend.dev>"),
        admin_notify_email=_getenv("ADMIN_NOTIFY_EMAIL", "innovexarena@gmail.com"),
    )


def load_config() -> dict:
    s = load_settings()
    is_production = s.env in ("prod", "production")
    return {
        "SECRET_KEY": s.secret_key,
        "ENV": s.env,
        "DATABASE_URL": s.database_url,
        "STORAGE_BACKEND": s.storage_backend,
        "STORAGE_PUBLIC_BASE_URL": s.storage_public_base_url,
        "S3_ENDPOINT": s.s3_endpoint,
        "S3_REGION": s.s3_region,
        "S3_BUCKET": s.s3_bucket,
        "S3_ACCESS_KEY_ID": s.s3_access_key_id,
        "S3_SECRET_ACCESS_KEY": s.s3_secret_access_key,
        "RESEND_API_KEY": s.resend_api_key,
        "MAIL_FROM": s.mail_from,
        "ADMIN_NOTIFY_EMAIL": s.admin_notify_email,
        # security defaults
        "SESSION_COOKIE_HTTPONLY": True,
        "SESSION_COOKIE_SAMESITE": "Lax",
        "SESSION_COOKIE_SECURE": is_production,
        # request body ceiling; per-file limits live in uploads.py
        "MAX_CONTENT_LENGTH": 10 * 1024 * 1024,
    }
