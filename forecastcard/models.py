from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping, Optional

from forecastcard.errors import FetchFailure
from forecastcard.utils import as_number, parse_iso_datetime


class WeatherState(str, Enum):
    SUNNY = "sunny"
    CLEAR_NIGHT = "clear-night"
    PARTLY_CLOUDY = "partlycloudy"
    CLOUDY = "cloudy"
    FOG = "fog"
    SNOWY = "snowy"
    SNOWY_RAINY = "snowy-rainy"
    HAIL = "hail"
    POURING = "pouring"
    RAINY = "rainy"
    WINDY = "windy"
    LIGHTNING = "lightning"
    LIGHTNING_RAINY = "lightning-rainy"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ForecastPeriod:
    name: str
    start_time: datetime
    is_daytime: bool
    short_forecast: str
    temperature: Optional[float]
    temperature_unit: str

    @classmethod
    def from_json(cls, raw: Mapping[str, Any]) -> "ForecastPeriod":
        """Build a period from one entry of an NWS ``properties.periods`` array."""
        if not isinstance(raw, Mapping):
            raise FetchFailure(f"forecast period is not an object: {raw!r}")
        start = raw.get("startTime")
        if not isinstance(start, str):
            raise FetchFailure(f"forecast period has no startTime: {raw.get('name')!r}")
        try:
            start_time = parse_iso_datetime(start)
        except ValueError as exc:
            raise FetchFailure(f"unparseable startTime {start!r}") from exc
        return cls(
            name=str(raw.get("name") or ""),
            start_time=start_time,
            is_daytime=raw.get("isDaytime") is True,
            short_forecast=str(raw.get("shortForecast") or ""),
            temperature=as_number(raw.get("temperature")),
            temperature_unit=str(raw.get("temperatureUnit") or ""),
        )


@dataclass(frozen=True)
class TargetDate:
    """The day a run reports on.

    ``local_date`` is the calendar day chosen from the reference instant;
    ``year``/``month``/``day`` are the UTC fields of that day's local midnight
    and are what every record is compared against.
    """
    local_date: date
    year: int
    month: int
    day: int

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.year, self.month, self.day)

    def isoformat(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def compact(self) -> str:
        return f"{self.year:04d}{self.month:02d}{self.day:02d}"


@dataclass(frozen=True)
class RunContext:
    """Immutable per-run state: the reference instant and the target day derived from it once."""
    reference: datetime
    target: TargetDate


@dataclass(frozen=True)
class DailySummary:
    chosen_period: ForecastPeriod
    state: WeatherState
    low: str
    high: str
    description: str


@dataclass(frozen=True)
class TextBlock:
    text: str
    x: int
    y: int
    width: int
    font_size: int
    align: str = "left"
    lines: tuple[str, ...] = field(default=())
