from __future__ import annotations

import numbers
from datetime import datetime, timezone, tzinfo
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from forecastcard.errors import ConfigError


def parse_iso_naive(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, accepting a trailing ``Z`` for UTC. May return a naive datetime."""
    if not value:
        raise ValueError("Empty ISO datetime")
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def parse_iso_datetime(value: str) -> datetime:
    """Like ``parse_iso_naive`` but naive values are taken as UTC."""
    dt = parse_iso_naive(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def resolve_timezone(name: str | None) -> Optional[tzinfo]:
    """Return the IANA zone for ``name``; ``None`` means system local time."""
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigError(f"unknown timezone '{name}'") from exc


def to_local(dt: datetime, tz: tzinfo | None = None) -> datetime:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(tz) if tz is not None else dt.astimezone()


def now_local(tz: tzinfo | None = None) -> datetime:
    if tz is not None:
        return datetime.now(tz)
    return datetime.now().astimezone()


def as_number(value: Any) -> Optional[float]:
    # bool is a Number subclass but never a temperature
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return None
    return value


def format_temperature(value: Optional[float], unit: str | None) -> str:
    unit = unit or ""
    if value is None:
        return f"--{unit}"
    if float(value).is_integer():
        value = int(value)
    return f"{value}{unit}"
