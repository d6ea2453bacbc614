"""Aggregate application use cases."""

from .notifications import notify_new_report
from .verification_email import send_verification_email

__all__ = [
    "notify_new_report",
    "send_verification_email",
]
