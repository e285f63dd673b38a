"""Tests for the notify-application HTTP function."""
import http.client

import pytest

from app.innovex import create_app
from app.innovex.notifications import EmailError, ResendClient, notify_application

PAYLOAD = {
    "type": "career",
    "applicantName": "Ravi Kumar",
    "applicantEmail": "ravi@example.com",
    "position": "Full Stack Developer",
    "college": "IIT Delhi",
    "phone": "+91 98765 43210",
}


class FakeClient:
    def __init__(self):
        self.sent = []

    def send_email(self, *, sender, to, subject, html):
        self.sent.append({"from": sender, "to": to, "subject": subject, "html": html})
        return {"id": f"email-{len(self.sent)}"}


@pytest.fixture()
def app(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'test.db'}")
    monkeypatch.setenv("ENV", "test")
    monkeypatch.setenv("STORAGE_BACKEND", "local")
    monkeypatch.setenv("ADMIN_NOTIFY_EMAIL", "team@example.com")
    for k in ("S3_ENDPOINT", "S3_REGION", "S3_BUCKET", "S3_ACCESS_KEY_ID", "S3_SECRET_ACCESS_KEY", "RESEND_API_KEY"):
        monkeypatch.delenv(k, raising=False)
    return create_app()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def fake_client(monkeypatch):
    fake = FakeClient()
    monkeypatch.setattr("app.innovex.notifications.client_from_config", lambda config: fake)
    return fake


def test_options_preflight_has_cors_headers(client):
    r = client.open("/functions/notify-application", method="OPTIONS")
    assert r.status_code == 200
    assert r.headers["Access-Control-Allow-Origin"] == "*"
    assert "content-type" in r.headers["Access-Control-Allow-Headers"]


def test_success_sends_admin_and_applicant_emails(client, fake_client):
    r = client.post("/functions/notify-application", json=PAYLOAD)
    assert r.status_code == 200
    assert r.headers["Access-Control-Allow-Origin"] == "*"
    assert r.json == {"success": True, "adminEmail": {"id": "email-1"}, "applicantEmail": {"id": "email-2"}}

    admin_mail, applicant_mail = fake_client.sent
    assert admin_mail["to"] == ["team@example.com"]
    assert admin_mail["subject"] == "New Career Application: Ravi Kumar"
    assert "Ravi Kumar" in admin_mail["html"]
    assert applicant_mail["to"] == ["ravi@example.com"]
    assert applicant_mail["subject"] == "Application Received - Full Stack Developer at Innovex Arena"


def test_non_json_body_is_500(client, fake_client):
    r = client.post("/functions/notify-application", data="not json", content_type="text/plain")
    assert r.status_code == 500
    assert "error" in r.json
    assert r.headers["Access-Control-Allow-Origin"] == "*"
    assert fake_client.sent == []


def test_unknown_type_is_500(client, fake_client):
    r = client.post("/functions/notify-application", json=dict(PAYLOAD, type="volunteer"))
    assert r.status_code == 500
    assert "type" in r.json["error"]
    assert fake_client.sent == []


def test_missing_api_key_is_500(client):
    r = client.post("/functions/notify-application", json=PAYLOAD)
    assert r.status_code == 500
    assert r.json == {"error": "RESEND_API_KEY is not configured"}


def test_missing_fields_raise(app, fake_client):
    with app.app_context():
        with pytest.raises(EmailError, match="applicantEmail"):
            notify_application(dict(PAYLOAD, applicantEmail=""), client=fake_client)
    assert fake_client.sent == []


def test_resend_client_requires_key():
    with pytest.raises(EmailError):
        ResendClient(api_key="").send_email(sender="a@example.com", to=["b@example.com"], subject="s", html="h")


def test_timeout_returns_json_error_with_cors(app, client, monkeypatch):
    app.config["RESEND_API_KEY"] = "re_test"

    def timed_out(*args, **kwargs):
        raise TimeoutError("The read operation timed out")

    monkeypatch.setattr("urllib.request.urlopen", timed_out)
    r = client.post("/functions/notify-application", json=PAYLOAD)
    assert r.status_code == 500
    assert r.mimetype == "application/json"
    assert "timed out" in r.json["error"]
    assert r.headers["Access-Control-Allow-Origin"] == "*"


class TestResendClientErrors:
    """Network failures below HTTP all surface as EmailError."""

    @pytest.mark.parametrize(
        "exc",
        [
            TimeoutError("timed out"),
            ConnectionResetError("reset by peer"),
            http.client.RemoteDisconnected("closed connection"),
        ],
    )
    def test_transport_errors_become_email_error(self, monkeypatch, exc):
        def failing(*args, **kwargs):
            raise exc

        monkeypatch.setattr("urllib.request.urlopen", failing)
        with pytest.raises(EmailError, match="Resend request failed"):
            ResendClient(api_key="re_test").send_email(
                sender="a@example.com", to=["b@example.com"], subject="s", html="h"
            )
