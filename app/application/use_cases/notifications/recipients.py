"""Use case resolving the staff accounts that receive report notifications."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import TPPK_ROLE, Recipient
from app.domain.exceptions import InvalidRequestError
from app.infrastructure.repositories import UserRepository


def resolve_recipients(
    session: Session, school_id: str, *, role: str = TPPK_ROLE
) -> list[Recipient]:
    """Return the active ``role`` accounts of ``school_id`` in store order.

    An empty list is a valid answer; callers decide whether it is an error.
    Store failures surface as :class:`StoreUnavailableError`.
    """

    if not school_id or not str(school_id).strip():
        raise InvalidRequestError("A school identifier is required to resolve recipients")
    return list(UserRepository(session).list_active_by_school_and_role(school_id, role))


__all__ = ["resolve_recipients"]
