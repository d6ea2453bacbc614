"""SQLAlchemy model for the ``users`` table."""

from uuid import uuid4

from sqlalchemy import Boolean, Column, DateTime, String, Text
from sqlalchemy.sql import expression

from app.infrastructure.database import Base
from app.utils import storage_now


class UserModel(Base):
    """Database representation of a school account.

    Rows are owned by the user-management subsystem; this service only reads
    them and maintains ``fcm_token``.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    full_name = Column(String(150), nullable=False)
    email = Column(String(254), nullable=True, index=True)
    school_id = Column(String(36), nullable=True, index=True)
    role = Column(String(30), nullable=False, index=True)
    is_active = Column(
        Boolean,
        nullable=False,
        default=True,
        server_default=expression.true(),
    )
    fcm_token = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=storage_now)
    updated_at = Column(DateTime, nullable=True)


__all__ = ["UserModel"]
