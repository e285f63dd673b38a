"""Tests for upload validation and storage keys."""
import re

import pytest
from botocore.exceptions import ClientError

from app.innovex.storage import S3Storage, StorageError
from app.innovex.uploads import (
    IMAGE_CONTENT_TYPES,
    MAX_UPLOAD_BYTES,
    RESUME_CONTENT_TYPES,
    UploadRejected,
    build_storage_key,
    store_upload,
    validate_upload,
)


class FakeStorage:
    def __init__(self):
        self.calls = []

    def put_bytes(self, key, data, *, content_type=None):
        self.calls.append((key, data, content_type))

    def public_url(self, key):
        return f"https://cdn.example.com/{key}"


class TestValidateUpload:
    def test_pdf_resume_accepted(self):
        validate_upload("application/pdf", 1024, RESUME_CONTENT_TYPES)

    def test_docx_resume_accepted(self):
        validate_upload(
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
            1024,
            RESUME_CONTENT_TYPES,
        )

    def test_exactly_max_size_accepted(self):
        validate_upload("image/png", MAX_UPLOAD_BYTES, IMAGE_CONTENT_TYPES)

    def test_wrong_resume_type(self):
        with pytest.raises(UploadRejected, match="PDF or Word"):
            validate_upload("text/plain", 10, RESUME_CONTENT_TYPES)

    def test_wrong_image_type(self):
        with pytest.raises(UploadRejected, match="image"):
            validate_upload("application/pdf", 10, IMAGE_CONTENT_TYPES)

    def test_too_large(self):
        with pytest.raises(UploadRejected, match="5MB"):
            validate_upload("application/pdf", MAX_UPLOAD_BYTES + 1, RESUME_CONTENT_TYPES)


class TestBuildStorageKey:
    def test_format(self):
        key = build_storage_key("resumes", "My CV.PDF", now_ms=1700000000000)
        assert re.fullmatch(r"resumes/1700000000000-[a-z0-9]{7}\.pdf", key)

    def test_missing_extension(self):
        key = build_storage_key("events", "noext", now_ms=1)
        assert key.startswith("events/1-")
        assert key.endswith(".bin")


class TestStoreUpload:
    def test_stores_and_returns_public_url(self):
        storage = FakeStorage()
        url = store_upload(
            storage,
            b"%PDF-1.4",
            "cv.pdf",
            "application/pdf",
            folder="resumes",
            allowed_types=RESUME_CONTENT_TYPES,
        )
        assert len(storage.calls) == 1
        key, data, content_type = storage.calls[0]
        assert key.startswith("resumes/")
        assert data == b"%PDF-1.4"
        assert content_type == "application/pdf"
        assert url == f"https://cdn.example.com/{key}"

    def test_rejected_type_is_never_stored(self):
        storage = FakeStorage()
        with pytest.raises(UploadRejected):
            store_upload(storage, b"hello", "cv.txt", "text/plain", folder="resumes", allowed_types=RESUME_CONTENT_TYPES)
        assert storage.calls == []

    def test_oversized_file_is_never_stored(self):
        storage = FakeStorage()
        with pytest.raises(UploadRejected):
            store_upload(
                storage,
                b"x" * (MAX_UPLOAD_BYTES + 1),
                "big.pdf",
                "application/pdf",
                folder="resumes",
                allowed_types=RESUME_CONTENT_TYPES,
            )
        assert storage.calls == []


class TestS3StorageErrors:
    def test_put_object_failure_becomes_storage_error(self, monkeypatch):
        class FailingS3Client:
            def put_object(self, **kwargs):
                raise ClientError({"Error": {"Code": "SlowDown", "Message": "Please reduce your request rate."}}, "PutObject")

        monkeypatch.setattr(S3Storage, "_client", lambda self: FailingS3Client())
        storage = S3Storage(
            endpoint="nyc3.digitaloceanspaces.com",
            region="nyc3",
            bucket="innovex",
            access_key_id="key",
            secret_access_key="secret",
        )
        with pytest.raises(StorageError, match="S3 upload failed"):
            store_upload(
                storage,
                b"%PDF-1.4",
                "cv.pdf",
                "application/pdf",
                folder="resumes",
                allowed_types=RESUME_CONTENT_TYPES,
            )
