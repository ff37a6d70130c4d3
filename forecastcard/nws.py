from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

import requests

from forecastcard.errors import FetchFailure, HourlyUnavailable
from forecastcard.models import ForecastPeriod

logger = logging.getLogger(__name__)

API_BASE = "https://api.weather.gov"


def _properties(data: Dict[str, Any], source: str) -> Dict[str, Any]:
    props = data.get("properties")
    if props is None:
        return {}
    if not isinstance(props, dict):
        raise FetchFailure(f"{source}: properties is {type(props).__name__}, expected an object")
    return props


class NWSClient:
    """Points lookup plus the two forecast collections for one fixed location.

    Use as a context manager so the HTTP session is closed on every path.
    """

    def __init__(
        self,
        lat: float,
        lon: float,
        user_agent: str,
        timeout: float = 15,
        session: Optional[requests.Session] = None,
    ):
        self.lat = lat
        self.lon = lon
        self.ua = user_agent
        self.timeout = timeout
        self.session = session or requests.Session()
        self._forecast_url: Optional[str] = None
        self._hourly_url: Optional[str] = None

    def __enter__(self) -> "NWSClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def _get(self, url: str) -> Dict[str, Any]:
        try:
            r = self.session.get(
                url,
                headers={
                    "User-Agent": self.ua,
                    "Accept": "application/geo+json,application/json",
                },
                timeout=self.timeout,
            )
            r.raise_for_status()
            data = r.json()
        except requests.RequestException as exc:
            raise FetchFailure(f"GET {url} failed: {exc}") from exc
        except ValueError as exc:
            raise FetchFailure(f"GET {url} returned invalid JSON") from exc
        if not isinstance(data, dict):
            raise FetchFailure(f"GET {url} returned {type(data).__name__}, expected an object")
        return data

    def _resolve_points(self) -> None:
        if self._forecast_url:
            return
        data = self._get(f"{API_BASE}/points/{self.lat},{self.lon}")
        props = _properties(data, "point metadata")
        self._forecast_url = props.get("forecast")
        self._hourly_url = props.get("forecastHourly")
        if not self._forecast_url:
            raise FetchFailure("Forecast URL not found in point metadata")

    def _periods(self, url: str) -> List[ForecastPeriod]:
        data = self._get(url)
        raw = _properties(data, url).get("periods") or []
        if not isinstance(raw, list):
            raise FetchFailure(f"periods from {url} is not a list")
        return [ForecastPeriod.from_json(p) for p in raw]

    def forecast(self) -> List[ForecastPeriod]:
        self._resolve_points()
        periods = self._periods(self._forecast_url)
        logger.info("[nws] %d forecast periods", len(periods))
        return periods

    def hourly(self) -> List[ForecastPeriod]:
        self._resolve_points()
        if not self._hourly_url:
            raise HourlyUnavailable("Hourly forecast URL not found in point metadata")
        try:
            periods = self._periods(self._hourly_url)
        except FetchFailure as exc:
            raise HourlyUnavailable(str(exc)) from exc
        logger.info("[nws] %d hourly periods", len(periods))
        return periods

    def hourly_or_empty(self) -> List[ForecastPeriod]:
        try:
            return self.hourly()
        except HourlyUnavailable as exc:
            logger.warning("[nws] hourly forecast unavailable (%s); using period temperature", exc)
            return []
