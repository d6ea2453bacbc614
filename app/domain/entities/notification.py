"""Domain entity representing a notification stored in a user's inbox."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class Notification:
    """Message persisted for one recipient, independent of push delivery."""

    id: str | None
    user_id: str
    title: str
    body: str
    data: dict[str, Any] = field(default_factory=dict)
    is_read: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = ["Notification"]
