"""Domain entities exposed by the application."""

from .delivery import DeliveryAttemptResult, DeliveryOutcome, FanOutReport
from .notification import Notification
from .report_event import NewReportEvent
from .user import TPPK_ROLE, Recipient, User

__all__ = [
    "DeliveryAttemptResult",
    "DeliveryOutcome",
    "FanOutReport",
    "Notification",
    "NewReportEvent",
    "TPPK_ROLE",
    "Recipient",
    "User",
]
