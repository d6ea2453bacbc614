"""Utility helpers for reusable functionality."""

from .datetime import (
    from_storage_datetime,
    get_app_timezone,
    now_in_app_timezone,
    storage_now,
    to_storage_datetime,
)
from .payload import Payload, deserialize_payload, flatten_payload, serialize_payload

__all__ = [
    "from_storage_datetime",
    "get_app_timezone",
    "now_in_app_timezone",
    "storage_now",
    "to_storage_datetime",
    "Payload",
    "deserialize_payload",
    "flatten_payload",
    "serialize_payload",
]
