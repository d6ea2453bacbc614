from .base import ApiModel, MessageResponse
from .email import VerificationEmailRequest, VerificationEmailResponse
from .health import HealthResponse
from .notification import (
    DeliveryResultRead,
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

__all__ = [
    "ApiModel",
    "MessageResponse",
    "VerificationEmailRequest",
    "VerificationEmailResponse",
    "HealthResponse",
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
