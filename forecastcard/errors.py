from __future__ import annotations


class ForecastCardError(Exception):
    """Base class for everything the card pipeline raises on purpose."""


class ConfigError(ForecastCardError):
    pass


class FetchFailure(ForecastCardError):
    """Non-success response or malformed payload from the forecast source."""


class HourlyUnavailable(FetchFailure):
    """Hourly data could not be fetched; callers fall back to the period temperature."""


class EmptyWindow(ForecastCardError):
    """No forecast periods fall on the target date."""


class BackgroundMissing(ForecastCardError):
    pass


class RenderFailure(ForecastCardError):
    pass


class PrintFailure(ForecastCardError):
    pass
