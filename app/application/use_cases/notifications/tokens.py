"""Use cases around the push token stored for each user."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.domain.entities import DeliveryOutcome
from app.domain.exceptions import InvalidRequestError, NotFoundError
from app.infrastructure.push import PushDeliveryClient
from app.infrastructure.repositories import UserRepository

logger = logging.getLogger(__name__)

TEST_NOTIFICATION_TITLE = "Test Notification"
TEST_NOTIFICATION_BODY = "This is a test notification"


def update_fcm_token(session: Session, user_id: str | None, fcm_token: str | None) -> None:
    """Replace the push token of ``user_id`` with ``fcm_token``."""

    if not user_id or not fcm_token:
        raise InvalidRequestError("Missing userId or fcmToken")
    UserRepository(session).update_fcm_token(user_id, fcm_token)
    logger.info("FCM token updated for user %s", user_id)


def send_test_notification(
    session: Session,
    user_id: str | None,
    *,
    push_client: PushDeliveryClient,
    title: str | None = None,
    body: str | None = None,
) -> DeliveryOutcome:
    """Push a test message to the device registered for ``user_id``."""

    if not user_id:
        raise InvalidRequestError("Missing userId")

    user = UserRepository(session).get(user_id)
    if user is None or not user.fcm_token:
        raise NotFoundError("FCM token not found for user")

    return push_client.deliver(
        user.fcm_token,
        title or TEST_NOTIFICATION_TITLE,
        body or TEST_NOTIFICATION_BODY,
        {"type": "test"},
    )


__all__ = [
    "TEST_NOTIFICATION_BODY",
    "TEST_NOTIFICATION_TITLE",
    "send_test_notification",
    "update_fcm_token",
]
