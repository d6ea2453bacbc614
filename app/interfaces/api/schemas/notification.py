"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from .base import ApiModel, Identifier


class NewReportRequest(ApiModel):
    """Incident report that must be announced to the school's TPPK staff."""

    report_id: Identifier = None
    report_number: Identifier = None
    school_id: Identifier = Field(
        default=None,
        validation_alias=AliasChoices("schoolId", "scopeId", "school_id"),
    )
    reporter_name: str | None = None
    incident_category: str | None = None


class DeliveryResultRead(ApiModel):
    """Per-recipient outcome of a fan-out."""

    user_id: str
    user_name: str
    fcm_sent: bool
    fcm_error: str | None = None


class NewReportResponse(ApiModel):
    success: bool = True
    message: str
    total_recipients: int
    results: list[DeliveryResultRead]


class UpdateFcmTokenRequest(ApiModel):
    user_id: Identifier = None
    fcm_token: str | None = None


class TestNotificationRequest(ApiModel):
    user_id: Identifier = None
    title: str | None = None
    body: str | None = None


class TestNotificationResponse(ApiModel):
    success: bool
    message: str
    error: str | None = None


class NotificationRead(BaseModel):
    """Stored notification as returned to the mobile client."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: str
    body: str
    data: dict[str, Any] = Field(default_factory=dict)
    is_read: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PaginationRead(ApiModel):
    page: int
    limit: int
    total: int
    total_pages: int


class NotificationListResponse(ApiModel):
    success: bool = True
    notifications: list[NotificationRead]
    pagination: PaginationRead


class UnreadCountResponse(ApiModel):
    success: bool = True
    unread_count: int


__all__ = [
    "DeliveryResultRead",
    "NewReportRequest",
    "NewReportResponse",
    "NotificationListResponse",
    "NotificationRead",
    "PaginationRead",
    "TestNotificationRequest",
    "TestNotificationResponse",
    "UnreadCountResponse",
    "UpdateFcmTokenRequest",
]
