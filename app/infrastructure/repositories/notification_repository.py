"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.entities import Notification
from app.domain.exceptions import StoreUnavailableError, StoreWriteFailedError
from app.infrastructure.models import NotificationModel
from app.utils import (
    deserialize_payload,
    from_storage_datetime,
    serialize_payload,
    storage_now,
)


class NotificationRepository:
    """Provide the inbox operations over :class:`Notification` records."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def append(
        self,
        user_id: str,
        title: str,
        body: str,
        data: Mapping[str, Any] | None = None,
    ) -> Notification:
        """Insert one unread notification for ``user_id``."""

        now = storage_now()
        model = NotificationModel(
            user_id=user_id,
            title=title,
            body=body,
            data=serialize_payload(data),
            is_read=False,
            created_at=now,
            updated_at=now,
        )
        self.session.add(model)
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StoreWriteFailedError(f"Failed to save notification: {exc}") from exc
        self.session.refresh(model)
        return self._to_entity(model)

    def list_for_user(
        self,
        user_id: str,
        *,
        page: int = 1,
        page_size: int = 20,
        is_read: bool | None = None,
    ) -> tuple[Sequence[Notification], int]:
        """Return one page of notifications, newest first, and the total count."""

        offset = (max(page, 1) - 1) * page_size
        try:
            query = self.session.query(NotificationModel).filter(
                NotificationModel.user_id == user_id
            )
            if is_read is not None:
                query = query.filter(NotificationModel.is_read.is_(is_read))
            total = query.order_by(None).count()
            models = (
                query.order_by(
                    NotificationModel.created_at.desc(), NotificationModel.id.desc()
                )
                .offset(offset)
                .limit(page_size)
                .all()
            )
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"Failed to load notifications: {exc}") from exc
        return [self._to_entity(model) for model in models], total

    def mark_as_read(self, notification_id: str) -> int:
        return self._mark_read(NotificationModel.id == notification_id)

    def mark_all_as_read(self, user_id: str) -> int:
        """Mark every unread notification of ``user_id`` as read."""

        return self._mark_read(
            NotificationModel.user_id == user_id,
            NotificationModel.is_read.is_(False),
        )

    def count_unread(self, user_id: str) -> int:
        try:
            return (
                self.session.query(func.count(NotificationModel.id))
                .filter(NotificationModel.user_id == user_id)
                .filter(NotificationModel.is_read.is_(False))
                .scalar()
                or 0
            )
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"Failed to count notifications: {exc}") from exc

    def _mark_read(self, *criteria) -> int:
        try:
            updated = (
                self.session.query(NotificationModel)
                .filter(*criteria)
                .update(
                    {
                        NotificationModel.is_read: True,
                        NotificationModel.updated_at: storage_now(),
                    },
                    synchronize_session=False,
                )
            )
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StoreWriteFailedError(f"Failed to update notifications: {exc}") from exc
        return updated

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            title=model.title,
            body=model.body,
            data=deserialize_payload(model.data),
            is_read=bool(model.is_read),
            created_at=from_storage_datetime(model.created_at),
            updated_at=from_storage_datetime(model.updated_at),
        )


__all__ = ["NotificationRepository"]
