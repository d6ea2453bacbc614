"""Endpoints for report fan-out, push tokens and the notification inbox."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    count_unread,
    list_inbox,
    mark_all_notifications_read,
    mark_notification_read,
    notify_new_report,
    send_test_notification,
    update_fcm_token,
)
from app.config import Settings, get_settings
from app.domain.entities import FanOutReport, NewReportEvent
from app.infrastructure.database import get_db
from app.infrastructure.push import PushDeliveryClient
from app.interfaces.api.dependencies import get_push_client
from app.interfaces.api.schemas import (
    DeliveryResultRead,
    MessageResponse,
    NewReportRequest,
    NewReportResponse,
    NotificationListResponse,
    NotificationRead,
    PaginationRead,
    TestNotificationRequest,
    TestNotificationResponse,
    UnreadCountResponse,
    UpdateFcmTokenRequest,
)

router = APIRouter(prefix="/api/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


def _report_to_schema(report: FanOutReport) -> NewReportResponse:
    return NewReportResponse(
        message=f"Notifications sent to {report.total_recipients} TPPK users",
        total_recipients=report.total_recipients,
        results=[
            DeliveryResultRead(
                user_id=result.recipient_id,
                user_name=result.recipient_name,
                fcm_sent=result.fcm_sent,
                fcm_error=result.fcm_error,
            )
            for result in report.results
        ],
    )


@router.post("/new-report", response_model=NewReportResponse)
def notify_new_report_endpoint(
    payload: NewReportRequest,
    db: Session = Depends(get_db),
    push_client: PushDeliveryClient = Depends(get_push_client),
    settings: Settings = Depends(get_settings),
) -> NewReportResponse:
    """Store and push a new-report notification to every TPPK of the school."""

    logger.info("Received new-report notification request for report %s", payload.report_id)
    event = NewReportEvent(
        report_id=payload.report_id,
        report_number=payload.report_number,
        school_id=payload.school_id,
        reporter_name=payload.reporter_name,
        incident_category=payload.incident_category,
    )
    report = notify_new_report(
        db, event, push_client=push_client, max_workers=settings.push_max_workers
    )
    return _report_to_schema(report)


@router.post("/update-fcm-token", response_model=MessageResponse)
def update_fcm_token_endpoint(
    payload: UpdateFcmTokenRequest,
    db: Session = Depends(get_db),
) -> MessageResponse:
    """Replace the push token registered for a user."""

    update_fcm_token(db, payload.user_id, payload.fcm_token)
    return MessageResponse(message="FCM token updated successfully")


@router.post("/test", response_model=TestNotificationResponse)
def send_test_notification_endpoint(
    payload: TestNotificationRequest,
    db: Session = Depends(get_db),
    push_client: PushDeliveryClient = Depends(get_push_client),
) -> TestNotificationResponse:
    """Push a test message to the device of a user."""

    outcome = send_test_notification(
        db,
        payload.user_id,
        push_client=push_client,
        title=payload.title,
        body=payload.body,
    )
    return TestNotificationResponse(
        success=outcome.success,
        message="Test notification sent" if outcome.success else "Failed to send notification",
        error=outcome.error,
    )


@router.get("/{user_id}", response_model=NotificationListResponse)
def list_notifications(
    user_id: str,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    is_read: bool | None = Query(None, alias="isRead"),
    db: Session = Depends(get_db),
) -> NotificationListResponse:
    """Return one page of the user's notifications, newest first."""

    inbox = list_inbox(db, user_id, page=page, limit=limit, is_read=is_read)
    return NotificationListResponse(
        notifications=[
            NotificationRead.model_validate(notification)
            for notification in inbox.notifications
        ],
        pagination=PaginationRead(
            page=inbox.page,
            limit=inbox.limit,
            total=inbox.total,
            total_pages=inbox.total_pages,
        ),
    )


@router.get("/{user_id}/unread-count", response_model=UnreadCountResponse)
def read_unread_count(user_id: str, db: Session = Depends(get_db)) -> UnreadCountResponse:
    return UnreadCountResponse(unread_count=count_unread(db, user_id))


@router.patch("/{notification_id}/read", response_model=MessageResponse)
def mark_read(notification_id: str, db: Session = Depends(get_db)) -> MessageResponse:
    mark_notification_read(db, notification_id)
    return MessageResponse(message="Notification marked as read")


@router.patch("/{user_id}/mark-all-read", response_model=MessageResponse)
def mark_all_read(user_id: str, db: Session = Depends(get_db)) -> MessageResponse:
    """Mark every unread notification of the user as read."""

    mark_all_notifications_read(db, user_id)
    return MessageResponse(message="All notifications marked as read")
