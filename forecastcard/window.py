"""Target-day resolution and filtering of forecast records to that day."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Iterable, List, Optional, TypeVar

from forecastcard.errors import ConfigError, EmptyWindow
from forecastcard.models import ForecastPeriod, RunContext, TargetDate
from forecastcard.utils import now_local, parse_iso_naive, to_local

logger = logging.getLogger(__name__)

OVERRIDE_ENV = "CURRENT_DATETIME_OVERRIDE"

# Local hour from which the card describes tomorrow instead of today
ROLLOVER_HOUR = 6

P = TypeVar("P", bound=ForecastPeriod)


def reference_instant(override: str | None = None, tz: tzinfo | None = None) -> datetime:
    """The run's "now": the wall clock, or ``override`` when set. Naive overrides are local time."""
    if not override:
        return now_local(tz)
    try:
        dt = parse_iso_naive(override.strip())
    except ValueError as exc:
        raise ConfigError(f"{OVERRIDE_ENV} is not an ISO-8601 timestamp: {override!r}") from exc
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=tz) if tz is not None else dt.astimezone()
    return dt


def _local_midnight(day, tz: tzinfo | None) -> datetime:
    if tz is not None:
        return datetime(day.year, day.month, day.day, tzinfo=tz)
    # naive astimezone() resolves against the system zone
    return datetime(day.year, day.month, day.day).astimezone()


def resolve_target_date(reference: datetime, tz: tzinfo | None = None) -> TargetDate:
    local = to_local(reference, tz)
    offset = 1 if local.hour >= ROLLOVER_HOUR else 0
    target_day = local.date() + timedelta(days=offset)
    # Compare in UTC fields of local midnight; differs from target_day east of UTC and around DST changes
    utc = _local_midnight(target_day, tz).astimezone(timezone.utc)
    return TargetDate(local_date=target_day, year=utc.year, month=utc.month, day=utc.day)


def build_context(reference: datetime, tz: tzinfo | None = None) -> RunContext:
    target = resolve_target_date(reference, tz)
    logger.info("[window] reference %s -> target %s", reference.isoformat(), target.isoformat())
    return RunContext(reference=reference, target=target)


def on_target_date(start_time: datetime, target: TargetDate) -> bool:
    utc = start_time.astimezone(timezone.utc)
    return (utc.year, utc.month, utc.day) == target.as_tuple()


def filter_to_target_date(records: Optional[Iterable[P]], target: TargetDate) -> List[P]:
    return [r for r in records or () if on_target_date(r.start_time, target)]


def select_daily_periods(records: Optional[Iterable[P]], target: TargetDate) -> List[P]:
    """Like ``filter_to_target_date`` but an empty result is fatal."""
    daily = filter_to_target_date(records, target)
    if not daily:
        raise EmptyWindow(f"No forecast periods found for target date {target.isoformat()}")
    return daily
