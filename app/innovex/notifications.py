"""
Application notification emails (admin alert + applicant confirmation) sent through Resend,
and the `/functions/notify-application` HTTP endpoint that exposes them.
"""
from __future__ import annotations

import http.client
import json
import logging
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Any

from flask import Blueprint, current_app, jsonify, make_response, render_template, request

logger = logging.getLogger(__name__)

bp = Blueprint("functions", __name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

_REQUIRED_FIELDS = ("type", "applicantName", "applicantEmail", "position", "college", "phone")


class EmailError(RuntimeError):
    pass


@dataclass(frozen=True)
class ResendClient:
    api_key: str
    base_url: str = "https://api.resend.com"
    timeout_seconds: int = 30

    def send_email(self, *, sender: str, to: list[str], subject: str, html: str) -> dict[str, Any]:
        if not self.api_key:
            raise EmailError("RESEND_API_KEY is not configured")
        body = json.dumps({"from": sender, "to": to, "subject": subject, "html": html}).encode("utf-8")
        req = urllib.request.Request(self.base_url.rstrip("/") + "/emails", data=body, method="POST")
        req.add_header("Authorization", f"Bearer {self.api_key}")
        req.add_header("Content-Type", "application/json")
        req.add_header("Accept", "application/json")
        try:
            with urllib.request.urlopen(req, timeout=self.timeout_seconds) as resp:
                raw = resp.read()
        except urllib.error.HTTPError as e:
            detail = e.read().decode("utf-8", errors="ignore")
            raise EmailError(f"HTTP {e.code} from Resend: {detail[:300]}") from e
        except urllib.error.URLError as e:
            raise EmailError(f"Resend request failed: {e.reason}") from e
        except (http.client.HTTPException, OSError) as e:
            # read timeouts and dropped connections surface here, not as URLError
            raise EmailError(f"Resend request failed: {e!r}") from e
        try:
            return json.loads(raw.decode("utf-8"))
        except ValueError as e:
            raise EmailError("Invalid JSON from Resend") from e


def client_from_config(config: dict) -> ResendClient:
    return ResendClient(api_key=(config.get("RESEND_API_KEY") or "").strip())


def _kind_label(kind: str) -> str:
    return "Internship" if kind == "internship" else "Career"


def notify_application(payload: dict[str, Any], *, client: ResendClient | None = None) -> dict[str, Any]:
    """
    Send the admin alert and the applicant confirmation for one application.

    `payload` uses the wire names: type, applicantName, applicantEmail, position, college, phone.
    Returns both send results as reported by the email API.
    """
    missing = [k for k in _REQUIRED_FIELDS if not str(payload.get(k) or "").strip()]
    if missing:
        raise EmailError(f"Missing fields: {', '.join(missing)}")

    cfg = current_app.config
    client = client or client_from_config(cfg)
    sender = cfg.get("MAIL_FROM") or "Innovex Arena <onboarding@resend.dev>"
    admin_email = cfg.get("ADMIN_NOTIFY_EMAIL") or "innovexarena@gmail.com"
    kind = payload["type"]
    ctx = {
        "kind": kind,
        "kind_label": _kind_label(kind),
        "name": payload["applicantName"],
        "email": payload["applicantEmail"],
        "phone": payload["phone"],
        "position": payload["position"],
        "college": payload["college"],
        "contact_email": admin_email,
    }

    logger.info("Processing %s application notification for: %s", kind, ctx["name"])

    admin_result = client.send_email(
        sender=sender,
        to=[admin_email],
        subject=f"New {ctx['kind_label']} Application: {ctx['name']}",
        html=render_template("emails/application_admin.html", **ctx),
    )
    logger.info("Admin notification sent: %s", admin_result)

    applicant_result = client.send_email(
        sender=sender,
        to=[ctx["email"]],
        subject=f"Application Received - {ctx['position']} at Innovex Arena",
        html=render_template("emails/application_applicant.html", **ctx),
    )
    logger.info("Applicant confirmation sent: %s", applicant_result)

    return {"adminEmail": admin_result, "applicantEmail": applicant_result}


def _with_cors(resp):
    for k, v in CORS_HEADERS.items():
        resp.headers[k] = v
    return resp


@bp.route("/functions/notify-application", methods=["POST", "OPTIONS"])
def notify_application_endpoint():
    if request.method == "OPTIONS":
        return _with_cors(make_response("", 200))

    payload = request.get_json(silent=True)
    try:
        if not isinstance(payload, dict):
            raise EmailError("Request body must be a JSON object")
        if payload.get("type") not in ("internship", "career"):
            raise EmailError("type must be 'internship' or 'career'")
        results = notify_application(payload)
    except EmailError as e:
        logger.error("Error in notify-application function: %s", e)
        return _with_cors(make_response(jsonify({"error": str(e)}), 500))

    return _with_cors(make_response(jsonify({"success": True, **results}), 200))
