"""Helpers for working with timestamps in the application timezone."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.config import get_settings

_DEFAULT_TIMEZONE: Final[str] = "Asia/Jakarta"
_OFFSET_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the timezone configured through ``APP_TIMEZONE``.

    Unknown names fall back to ``Asia/Jakarta``, where the schools using the
    service are located. Offsets such as ``UTC+07:00`` are also accepted.
    """

    tz_name = (get_settings().app_timezone or "").strip() or _DEFAULT_TIMEZONE
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        match = _OFFSET_PATTERN.match(tz_name)
        if match is None:
            return ZoneInfo(_DEFAULT_TIMEZONE)
    sign = -1 if match.group("sign") == "-" else 1
    offset = timedelta(
        hours=int(match.group("hours")), minutes=int(match.group("minutes") or 0)
    )
    return timezone(sign * offset)


def now_in_app_timezone() -> datetime:
    """Return the current time localized to the configured timezone."""

    return datetime.now(tz=get_app_timezone())


def to_storage_datetime(value: datetime | None) -> datetime | None:
    """Return ``value`` in the app timezone without ``tzinfo`` for the DB."""

    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(get_app_timezone())
    return value.replace(tzinfo=None)


def from_storage_datetime(value: datetime | None) -> datetime | None:
    """Attach the app timezone to a naive value read back from the DB."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=get_app_timezone())
    return value.astimezone(get_app_timezone())


def storage_now() -> datetime:
    """Return the current time in the form stored by timestamp columns."""

    return now_in_app_timezone().replace(tzinfo=None)
