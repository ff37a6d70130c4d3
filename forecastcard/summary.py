from __future__ import annotations

import logging
from typing import Sequence

from forecastcard.icons import classify
from forecastcard.models import DailySummary, ForecastPeriod
from forecastcard.utils import format_temperature

logger = logging.getLogger(__name__)


def choose_period(daily: Sequence[ForecastPeriod]) -> ForecastPeriod:
    # prefer a daytime period, otherwise first
    for p in daily:
        if p.is_daytime:
            return p
    return daily[0]


def summarize(daily: Sequence[ForecastPeriod], hourly: Sequence[ForecastPeriod]) -> DailySummary:
    """Reduce the target day's periods to the values printed on the card.

    ``daily`` must be non-empty (see ``window.select_daily_periods``). When no
    hourly entry carries a temperature, low and high both repeat the chosen
    period's own temperature.
    """
    chosen = choose_period(daily)
    state = classify(chosen.short_forecast, chosen.is_daytime)

    temps = [h.temperature for h in hourly if h.temperature is not None]
    if temps:
        unit = next((h.temperature_unit for h in hourly if h.temperature_unit), chosen.temperature_unit)
        low = format_temperature(min(temps), unit)
        high = format_temperature(max(temps), unit)
    else:
        if hourly:
            logger.warning("[summary] hourly periods carry no temperatures; using %r", chosen.name)
        low = high = format_temperature(chosen.temperature, chosen.temperature_unit)

    return DailySummary(
        chosen_period=chosen,
        state=state,
        low=low,
        high=high,
        description=f"{chosen.short_forecast}.",
    )
