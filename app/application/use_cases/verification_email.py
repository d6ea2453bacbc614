"""Use case for confirming a verified account by email."""

from __future__ import annotations

import logging

from app.domain.exceptions import EmailDeliveryError, InvalidRequestError
from app.infrastructure import email as email_gateway
from app.infrastructure.email import EmailDeliveryResult

logger = logging.getLogger(__name__)


def send_verification_email(email: str | None) -> EmailDeliveryResult:
    """Send the verification message to ``email`` or raise on failure."""

    if not email or not email.strip():
        raise InvalidRequestError("Missing 'email' in request body")

    result = email_gateway.send_verification_email(email.strip())
    if not result.success:
        raise EmailDeliveryError(
            result.error or "Failed to send verification email", details=result.details
        )
    logger.info("Verification email sent to %s", result.recipient)
    return result


__all__ = ["send_verification_email"]
