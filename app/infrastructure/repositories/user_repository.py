"""Persistence layer for user data."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.entities import Recipient, User
from app.domain.exceptions import StoreUnavailableError, StoreWriteFailedError
from app.infrastructure.models import UserModel
from app.utils import from_storage_datetime, storage_now, to_storage_datetime

logger = logging.getLogger(__name__)


class UserRepository:
    """Provide the user operations needed by the notification service."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: str) -> User | None:
        try:
            model = self.session.get(UserModel, user_id)
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"Failed to load user {user_id}: {exc}") from exc
        return self._to_entity(model) if model else None

    def list_active_by_school_and_role(
        self, school_id: str, role: str
    ) -> Sequence[Recipient]:
        """Return the active accounts of ``school_id`` holding ``role``."""

        try:
            rows = (
                self.session.query(UserModel.id, UserModel.full_name, UserModel.fcm_token)
                .filter(UserModel.school_id == school_id)
                .filter(func.lower(UserModel.role) == role.lower())
                .filter(UserModel.is_active.is_(True))
                .all()
            )
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"Failed to load recipients: {exc}") from exc
        return [
            Recipient(id=user_id, full_name=full_name or "", fcm_token=fcm_token)
            for user_id, full_name, fcm_token in rows
        ]

    def create(self, user: User) -> User:
        model = UserModel()
        if user.id:
            model.id = user.id
        self._apply_entity_to_model(model, user)
        model.created_at = to_storage_datetime(user.created_at) or storage_now()
        self.session.add(model)
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StoreWriteFailedError(f"Failed to save user: {exc}") from exc
        self.session.refresh(model)
        return self._to_entity(model)

    def update_fcm_token(self, user_id: str, fcm_token: str) -> int:
        """Overwrite the push token of ``user_id`` and return the rows touched."""

        try:
            updated = (
                self.session.query(UserModel)
                .filter(UserModel.id == user_id)
                .update(
                    {UserModel.fcm_token: fcm_token, UserModel.updated_at: storage_now()},
                    synchronize_session=False,
                )
            )
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StoreWriteFailedError(f"Failed to update FCM token: {exc}") from exc
        if not updated:
            logger.warning("No user with id %s to attach an FCM token to", user_id)
        return updated

    @staticmethod
    def _apply_entity_to_model(model: UserModel, user: User) -> None:
        model.full_name = user.full_name
        model.email = user.email
        model.school_id = user.school_id
        model.role = user.role
        model.is_active = user.is_active
        model.fcm_token = user.fcm_token
        model.updated_at = to_storage_datetime(user.updated_at)

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            full_name=model.full_name,
            email=model.email,
            school_id=model.school_id,
            role=model.role,
            is_active=model.is_active,
            fcm_token=model.fcm_token,
            created_at=from_storage_datetime(model.created_at),
            updated_at=from_storage_datetime(model.updated_at),
        )


__all__ = ["UserRepository"]
