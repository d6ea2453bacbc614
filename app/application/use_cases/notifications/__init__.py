"""Use cases for notifying staff and managing their inbox."""

from .inbox import (
    InboxPage,
    count_unread,
    list_inbox,
    mark_all_notifications_read,
    mark_notification_read,
)
from .new_report import compose_new_report_message, notify_new_report
from .recipients import resolve_recipients
from .tokens import send_test_notification, update_fcm_token

__all__ = [
    "InboxPage",
    "compose_new_report_message",
    "count_unread",
    "list_inbox",
    "mark_all_notifications_read",
    "mark_notification_read",
    "notify_new_report",
    "resolve_recipients",
    "send_test_notification",
    "update_fcm_token",
]
