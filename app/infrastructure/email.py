"""Utility helpers for sending transactional email notifications via SendGrid."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from app.config import get_settings

logger = logging.getLogger(__name__)

VERIFICATION_SUBJECT = "Akun Anda di SiPPKe sudah terverifikasi"
VERIFICATION_HTML = "".join(
    (
        "<p>Halo,</p>",
        "<p>Akun Anda di Sistem Pencegahan dan Penanganan Kekerasan (SiPPKe) "
        "sudah berhasil diverifikasi.</p>",
        "<p>Sekarang Anda bisa login dan mulai menggunakan layanan kami.</p>",
        "<p>Kalau ada pertanyaan atau butuh bantuan, jangan ragu untuk menghubungi kami.</p>",
        "<p>Terima kasih sudah menggunakan SiPPKe!</p>",
        "<p>Salam,<br/>Tim SiPPKe</p>",
    )
)


@dataclass(frozen=True)
class EmailDeliveryResult:
    """What the mail relay answered for one message."""

    success: bool
    recipient: str
    status_code: int | None = None
    message_id: str | None = None
    error: str | None = None
    details: str | None = None

    def as_info(self) -> dict[str, Any]:
        return {key: value for key, value in asdict(self).items() if value is not None}


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            body = json.loads(body)
        except json.JSONDecodeError:
            return body
    if not body:
        return None

    if isinstance(body, dict):
        messages = []
        for item in body.get("errors") or []:
            if not isinstance(item, dict) or not item.get("message"):
                continue
            help_link = item.get("help")
            messages.append(
                f"{item['message']} (help: {help_link})" if help_link else str(item["message"])
            )
        if messages:
            return "; ".join(messages)
        return json.dumps(body, default=str)

    if isinstance(body, list):
        return "; ".join(str(item) for item in body)
    return str(body)


def _header(response: Any, name: str) -> str | None:
    headers = getattr(response, "headers", None)
    if headers is None:
        return None
    try:
        value = headers.get(name)
    except AttributeError:
        return None
    return str(value) if value else None


def send_email(subject: str, html_content: str, recipient: str) -> EmailDeliveryResult:
    """Send an email using the configured SendGrid credentials."""

    settings = get_settings()
    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        logger.info("SendGrid configuration incomplete; skipping email delivery")
        return EmailDeliveryResult(
            success=False, recipient=recipient, error="Email delivery is not configured"
        )

    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=recipient,
        subject=subject,
        html_content=html_content,
    )

    try:
        response = SendGridAPIClient(settings.sendgrid_api_key).send(message)
    except Exception as exc:  # pragma: no cover - network failures depend on environment
        status_code = getattr(exc, "status_code", None)
        details = _extract_sendgrid_error_details(getattr(exc, "body", None))
        logger.error(
            "SendGrid API request failed with status %s: %s",
            status_code,
            details or exc,
        )
        return EmailDeliveryResult(
            success=False,
            recipient=recipient,
            status_code=status_code if isinstance(status_code, int) else None,
            error=str(exc) or "SendGrid API request failed",
            details=details,
        )

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        details = _extract_sendgrid_error_details(getattr(response, "body", None))
        logger.error("SendGrid API responded with status %s: %s", status_code, details)
        return EmailDeliveryResult(
            success=False,
            recipient=recipient,
            status_code=status_code if isinstance(status_code, int) else None,
            error=f"SendGrid API responded with status {status_code}",
            details=details,
        )

    return EmailDeliveryResult(
        success=True,
        recipient=recipient,
        status_code=status_code,
        message_id=_header(response, "X-Message-Id"),
    )


def send_verification_email(email: str) -> EmailDeliveryResult:
    """Tell the owner of ``email`` that their SiPPKe account was verified."""

    return send_email(VERIFICATION_SUBJECT, VERIFICATION_HTML, email)
