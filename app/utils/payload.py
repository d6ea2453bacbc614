"""Serialization of the structured data attached to notifications."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

Payload = dict[str, Any]


def serialize_payload(payload: Mapping[str, Any] | None) -> str:
    """Return the text stored in the ``notifications.data`` column.

    Keys keep their insertion order and non-ASCII text is written as-is so the
    stored value stays readable. Values must be JSON-representable.
    """

    if payload is None:
        return "{}"
    if not isinstance(payload, Mapping):
        raise TypeError("Notification payload must be a mapping")
    return json.dumps(dict(payload), ensure_ascii=False, allow_nan=False)


def deserialize_payload(raw: str | bytes | None) -> Payload:
    """Parse stored notification data back into a mapping.

    Empty values read back as an empty mapping. Text that is not a JSON object
    raises ``ValueError``.
    """

    if raw is None:
        return {}
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    if not raw.strip():
        return {}
    parsed = json.loads(raw)
    if not isinstance(parsed, dict):
        raise ValueError("Stored notification data is not a JSON object")
    return parsed


def flatten_payload(payload: Mapping[str, Any] | None) -> dict[str, str]:
    """Return ``payload`` with every value converted to text.

    Push providers only accept string values in the data section of a message.
    ``None`` becomes an empty string and nested structures are JSON encoded.
    """

    flattened: dict[str, str] = {}
    for key, value in (payload or {}).items():
        if value is None:
            flattened[str(key)] = ""
        elif isinstance(value, str):
            flattened[str(key)] = value
        elif isinstance(value, bool):
            flattened[str(key)] = "true" if value else "false"
        elif isinstance(value, (dict, list, tuple)):
            flattened[str(key)] = json.dumps(value, ensure_ascii=False)
        else:
            flattened[str(key)] = str(value)
    return flattened


__all__ = ["Payload", "serialize_payload", "deserialize_payload", "flatten_payload"]
