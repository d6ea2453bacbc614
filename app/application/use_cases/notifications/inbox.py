"""Use cases reading and updating a user's notification inbox."""

from __future__ import annotations

import math
from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.domain.entities import Notification
from app.domain.exceptions import InvalidRequestError
from app.infrastructure.repositories import NotificationRepository

DEFAULT_PAGE_SIZE = 20


@dataclass(frozen=True)
class InboxPage:
    """One page of a user's notifications."""

    notifications: list[Notification]
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


def list_inbox(
    session: Session,
    user_id: str,
    *,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    is_read: bool | None = None,
) -> InboxPage:
    """Return the ``page``-th block of ``limit`` notifications, newest first."""

    if page < 1 or limit < 1:
        raise InvalidRequestError("page and limit must be positive integers")
    notifications, total = NotificationRepository(session).list_for_user(
        user_id, page=page, page_size=limit, is_read=is_read
    )
    return InboxPage(notifications=list(notifications), page=page, limit=limit, total=total)


def mark_notification_read(session: Session, notification_id: str) -> None:
    NotificationRepository(session).mark_as_read(notification_id)


def mark_all_notifications_read(session: Session, user_id: str) -> int:
    """Mark every unread notification of ``user_id`` as read.

    Running it again is harmless: already read entries are not touched.
    """

    return NotificationRepository(session).mark_all_as_read(user_id)


def count_unread(session: Session, user_id: str) -> int:
    return NotificationRepository(session).count_unread(user_id)


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "InboxPage",
    "count_unread",
    "list_inbox",
    "mark_all_notifications_read",
    "mark_notification_read",
]
