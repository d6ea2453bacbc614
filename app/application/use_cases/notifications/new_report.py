"""Fan-out of new incident reports to the responsible school staff."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import (
    DeliveryAttemptResult,
    FanOutReport,
    NewReportEvent,
    Recipient,
)
from app.domain.exceptions import (
    InvalidRequestError,
    NoRecipientsError,
    StoreWriteFailedError,
)
from app.infrastructure.push import PushDeliveryClient
from app.infrastructure.repositories import NotificationRepository

from .recipients import resolve_recipients

logger = logging.getLogger(__name__)

NEW_REPORT_TITLE = "📋 Laporan Baru"
NEW_REPORT_EVENT_TYPE = "new_report"
DEFAULT_REPORTER_NAME = "Siswa"
MISSING_FIELDS_MESSAGE = "Missing required fields: reportId, reportNumber, schoolId"
NO_RECIPIENTS_MESSAGE = "No TPPK users found for this school"
NO_TOKEN_ERROR = "no token available"


def compose_new_report_message(event: NewReportEvent) -> tuple[str, str, dict[str, Any]]:
    """Return the title, body and payload shared by every recipient."""

    reporter_name = event.reporter_name or ""
    incident_category = (event.incident_category or "").strip()
    body = f"Laporan {event.report_number} dari {reporter_name or DEFAULT_REPORTER_NAME}"
    if incident_category:
        body = f"{body} - {incident_category}"
    payload = {
        "type": NEW_REPORT_EVENT_TYPE,
        "report_id": event.report_id,
        "report_number": event.report_number,
        "incident_category": incident_category,
        "reporter_name": reporter_name,
    }
    return NEW_REPORT_TITLE, body, payload


def notify_new_report(
    session: Session,
    event: NewReportEvent,
    *,
    push_client: PushDeliveryClient,
    max_workers: int = 1,
) -> FanOutReport:
    """Store and push a new-report notification for every TPPK of the school.

    Each recipient first gets a persisted inbox record; push delivery is only
    attempted for recipients whose record was saved and who hold a token. A
    failure for one recipient is reported in its result and never stops the
    others, and saved records are kept whatever the delivery outcome.

    Raises:
        InvalidRequestError: a required event field is missing.
        StoreUnavailableError: the recipients could not be loaded.
        NoRecipientsError: the school has no active TPPK account.
    """

    if event.missing_fields():
        logger.warning("New report event rejected, missing %s", event.missing_fields())
        raise InvalidRequestError(MISSING_FIELDS_MESSAGE)

    logger.info("Fetching TPPK users for school %s", event.school_id)
    recipients = resolve_recipients(session, str(event.school_id))
    logger.info("Found %d TPPK users", len(recipients))
    if not recipients:
        raise NoRecipientsError(NO_RECIPIENTS_MESSAGE)

    title, body, payload = compose_new_report_message(event)
    repository = NotificationRepository(session)

    results: list[DeliveryAttemptResult | None] = [None] * len(recipients)
    deliverable: list[tuple[int, Recipient]] = []
    for index, recipient in enumerate(recipients):
        try:
            repository.append(recipient.id, title, body, payload)
        except StoreWriteFailedError as exc:
            logger.error("Could not save notification for user %s: %s", recipient.id, exc)
            results[index] = _failed(recipient, exc.message)
            continue
        except Exception as exc:
            logger.exception("Unexpected error saving notification for user %s", recipient.id)
            results[index] = _failed(recipient, str(exc) or exc.__class__.__name__)
            continue
        logger.debug("Notification saved for user %s", recipient.id)

        if not recipient.has_push_token:
            logger.warning("No FCM token available for user %s", recipient.id)
            results[index] = _failed(recipient, NO_TOKEN_ERROR)
            continue
        deliverable.append((index, recipient))

    outcomes = _deliver_all(
        push_client,
        [recipient for _, recipient in deliverable],
        title=title,
        body=body,
        payload=payload,
        max_workers=max_workers,
    )
    for (index, _), result in zip(deliverable, outcomes):
        results[index] = result

    report = FanOutReport(results=[result for result in results if result is not None])
    logger.info(
        "Report %s notified %d TPPK users, %d push deliveries succeeded",
        event.report_number,
        report.total_recipients,
        report.delivered_count,
    )
    return report


def _deliver_all(
    push_client: PushDeliveryClient,
    recipients: Sequence[Recipient],
    *,
    title: str,
    body: str,
    payload: dict[str, Any],
    max_workers: int,
) -> list[DeliveryAttemptResult]:
    """Deliver to every recipient and return once all attempts finished."""

    def deliver(recipient: Recipient) -> DeliveryAttemptResult:
        try:
            outcome = push_client.deliver(recipient.fcm_token or "", title, body, payload)
        except Exception as exc:
            logger.exception("Unexpected push failure for user %s", recipient.id)
            return _failed(recipient, str(exc) or exc.__class__.__name__)
        return DeliveryAttemptResult(
            recipient_id=recipient.id,
            recipient_name=recipient.full_name,
            fcm_sent=outcome.success,
            fcm_error=None if outcome.success else outcome.error,
        )

    if max_workers <= 1 or len(recipients) <= 1:
        return [deliver(recipient) for recipient in recipients]

    with ThreadPoolExecutor(
        max_workers=min(max_workers, len(recipients)),
        thread_name_prefix="push-fanout",
    ) as executor:
        return list(executor.map(deliver, recipients))


def _failed(recipient: Recipient, error: str) -> DeliveryAttemptResult:
    return DeliveryAttemptResult(
        recipient_id=recipient.id,
        recipient_name=recipient.full_name,
        fcm_sent=False,
        fcm_error=error,
    )


__all__ = [
    "MISSING_FIELDS_MESSAGE",
    "NEW_REPORT_TITLE",
    "NO_RECIPIENTS_MESSAGE",
    "NO_TOKEN_ERROR",
    "compose_new_report_message",
    "notify_new_report",
]
