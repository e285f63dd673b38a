"""
Upload validation and storage for resumes (public careers form) and images (admin forms).

Validation runs before anything is handed to the storage backend, so a rejected
file never leaves the request.
"""
from __future__ import annotations

import logging
import secrets
import string
import time
from typing import TYPE_CHECKING

from werkzeug.utils import secure_filename

if TYPE_CHECKING:
    from werkzeug.datastructures import FileStorage

    from app.innovex.storage import Storage

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 5 * 1024 * 1024

RESUME_CONTENT_TYPES = frozenset(
    {
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    }
)

IMAGE_CONTENT_TYPES = frozenset({"image/jpeg", "image/png", "image/webp", "image/gif"})

_KEY_ALPHABET = string.ascii_lowercase + string.digits


class UploadRejected(ValueError):
    pass


def validate_upload(content_type: str, size_bytes: int, allowed_types: frozenset[str]) -> None:
    """Raise UploadRejected if the type is not allowed or the file exceeds 5MB."""
    if content_type not in allowed_types:
        if allowed_types is RESUME_CONTENT_TYPES:
            raise UploadRejected("Invalid file type. Please upload a PDF or Word document.")
        raise UploadRejected("Invalid file type. Please upload a JPEG, PNG, WebP or GIF image.")
    if size_bytes > MAX_UPLOAD_BYTES:
        raise UploadRejected("File too large. Please upload a file smaller than 5MB.")


def build_storage_key(folder: str, filename: str, *, now_ms: int | None = None) -> str:
    """`<folder>/<unix-millis>-<random7>.<ext>`"""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    safe = secure_filename(filename) or "upload.bin"
    ext = safe.rsplit(".", 1)[-1].lower() if "." in safe else "bin"
    rand = "".join(secrets.choice(_KEY_ALPHABET) for _ in range(7))
    return f"{folder}/{now_ms}-{rand}.{ext}"


def store_upload(
    storage: "Storage",
    file_bytes: bytes,
    filename: str,
    content_type: str,
    *,
    folder: str,
    allowed_types: frozenset[str],
) -> str:
    """Validate, store and return the public URL of the stored object."""
    try:
        validate_upload(content_type, len(file_bytes), allowed_types)
    except UploadRejected as e:
        logger.info("Upload rejected (folder=%s filename=%s type=%s size=%d): %s", folder, filename, content_type, len(file_bytes), e)
        raise
    key = build_storage_key(folder, filename)
    storage.put_bytes(key, file_bytes, content_type=content_type)
    return storage.public_url(key)


def store_request_file(
    storage: "Storage",
    f: "FileStorage | None",
    *,
    folder: str,
    allowed_types: frozenset[str],
) -> str | None:
    """Store an optional form file. Returns None when no file was chosen."""
    if not f or not f.filename:
        return None
    content_type = (f.mimetype or "application/octet-stream").strip()
    return store_upload(storage, f.read(), f.filename, content_type, folder=folder, allowed_types=allowed_types)
