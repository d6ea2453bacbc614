"""Push delivery through Firebase Cloud Messaging."""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol

import firebase_admin
from firebase_admin import credentials, exceptions as firebase_exceptions, messaging

from app.config import Settings, get_settings
from app.domain.entities import DeliveryOutcome
from app.domain.exceptions import DeliveryFailedError
from app.utils import flatten_payload

logger = logging.getLogger(__name__)

CLICK_ACTION = "FLUTTER_NOTIFICATION_CLICK"
NOT_CONFIGURED_ERROR = "Push delivery is not configured"

_firebase_lock = threading.Lock()
_firebase_initialized = False
_firebase_app: firebase_admin.App | None = None


class PushDeliveryClient(Protocol):
    """Anything able to send one push message to one device token."""

    def deliver(
        self, token: str, title: str, body: str, data: Mapping[str, Any] | None = None
    ) -> DeliveryOutcome:
        ...


def load_service_account(settings: Settings) -> dict[str, Any] | None:
    """Return the service account document, or ``None`` when none is configured.

    ``FIREBASE_SERVICE_ACCOUNT_KEY`` takes precedence over the file fallback. A
    key that is not valid JSON raises ``ValueError``.
    """

    if settings.firebase_service_account_key:
        logger.info("Using Firebase credentials from FIREBASE_SERVICE_ACCOUNT_KEY")
        try:
            account = json.loads(settings.firebase_service_account_key)
        except json.JSONDecodeError as exc:
            raise ValueError("FIREBASE_SERVICE_ACCOUNT_KEY is not valid JSON") from exc
    else:
        path = Path(settings.firebase_service_account_path)
        if not path.is_file():
            return None
        logger.warning(
            "FIREBASE_SERVICE_ACCOUNT_KEY is not set; falling back to %s", path
        )
        account = json.loads(path.read_text(encoding="utf-8"))

    if not isinstance(account, dict):
        raise ValueError("Firebase service account must be a JSON object")
    private_key = account.get("private_key")
    if isinstance(private_key, str):
        account["private_key"] = private_key.replace("\\n", "\n")
    return account


def initialize_firebase(settings: Settings | None = None) -> firebase_admin.App | None:
    """Configure the process-wide Firebase app exactly once.

    Later calls return the app created by the first one. When no credential
    source exists push delivery stays disabled and ``None`` is returned.
    """

    global _firebase_initialized, _firebase_app

    with _firebase_lock:
        if _firebase_initialized:
            return _firebase_app

        settings = settings or get_settings()
        try:
            _firebase_app = firebase_admin.get_app()
        except ValueError:
            account = load_service_account(settings)
            if account is None:
                logger.warning(
                    "No Firebase service account configured; push delivery disabled"
                )
                _firebase_app = None
            else:
                logger.info(
                    "Initializing Firebase for project %s as %s",
                    account.get("project_id"),
                    account.get("client_email"),
                )
                _firebase_app = firebase_admin.initialize_app(
                    credentials.Certificate(account),
                    options={"httpTimeout": settings.push_timeout_seconds},
                )
        _firebase_initialized = True
        if _firebase_app is not None:
            logger.info("Firebase initialized successfully")
        return _firebase_app


def get_firebase_app() -> firebase_admin.App | None:
    """Return the app configured by :func:`initialize_firebase`, if any."""

    return _firebase_app


class FirebasePushClient:
    """Send single push notifications through Firebase Cloud Messaging."""

    def __init__(
        self,
        app: firebase_admin.App | None = None,
        *,
        android_channel_id: str = "sippke_reports",
    ) -> None:
        self._app = app
        self._android_channel_id = android_channel_id

    def deliver(
        self, token: str, title: str, body: str, data: Mapping[str, Any] | None = None
    ) -> DeliveryOutcome:
        """Send one message and report the provider's answer without raising."""

        if not token or not token.strip():
            return DeliveryOutcome.failed("Push token is required")

        try:
            message_id = self._send(self.build_message(token, title, body, data))
        except DeliveryFailedError as exc:
            logger.warning("Push delivery skipped: %s", exc.message)
            return DeliveryOutcome.failed(exc.message)
        except firebase_exceptions.FirebaseError as exc:
            logger.error("FCM rejected message for token %s...: %s", token[:8], exc)
            return DeliveryOutcome.failed(str(exc))
        except Exception as exc:  # pragma: no cover - network failures depend on environment
            logger.exception("Error sending FCM notification: %s", exc)
            return DeliveryOutcome.failed(str(exc) or exc.__class__.__name__)

        logger.info("FCM notification sent successfully: %s", message_id)
        return DeliveryOutcome.delivered(message_id)

    def build_message(
        self, token: str, title: str, body: str, data: Mapping[str, Any] | None = None
    ) -> messaging.Message:
        payload = flatten_payload(data)
        payload["click_action"] = CLICK_ACTION
        return messaging.Message(
            token=token,
            notification=messaging.Notification(title=title, body=body),
            data=payload,
            android=messaging.AndroidConfig(
                priority="high",
                notification=messaging.AndroidNotification(
                    channel_id=self._android_channel_id,
                    default_sound=True,
                    default_vibrate_timings=True,
                ),
            ),
            apns=messaging.APNSConfig(
                payload=messaging.APNSPayload(aps=messaging.Aps(badge=1, sound="default"))
            ),
        )

    def _send(self, message: messaging.Message) -> str:
        app = self._app or get_firebase_app()
        if app is None:
            raise DeliveryFailedError(NOT_CONFIGURED_ERROR)
        return messaging.send(message, app=app)


__all__ = [
    "CLICK_ACTION",
    "NOT_CONFIGURED_ERROR",
    "FirebasePushClient",
    "PushDeliveryClient",
    "get_firebase_app",
    "initialize_firebase",
    "load_service_account",
]
