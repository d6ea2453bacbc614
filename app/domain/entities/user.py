"""Domain entities representing school accounts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

TPPK_ROLE = "tppk"


@dataclass
class User:
    """Account managed by the user-management subsystem of the school app."""

    id: str | None
    full_name: str
    email: str | None
    school_id: str | None
    role: str
    is_active: bool
    fcm_token: str | None
    created_at: datetime | None
    updated_at: datetime | None


@dataclass(frozen=True)
class Recipient:
    """Read-only view of a staff account eligible for a notification."""

    id: str
    full_name: str
    fcm_token: str | None = None

    @property
    def has_push_token(self) -> bool:
        return bool(self.fcm_token and self.fcm_token.strip())


__all__ = ["TPPK_ROLE", "Recipient", "User"]
