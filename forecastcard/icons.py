from __future__ import annotations
from pathlib import Path
from typing import Callable, Iterable, Sequence

from forecastcard.models import WeatherState

Rule = tuple[Callable[[str, bool], bool], Callable[[str, bool], WeatherState]]


def _has(*needles: str) -> Callable[[str, bool], bool]:
    return lambda s, _day: any(n in s for n in needles)


def _fixed(state: WeatherState) -> Callable[[str, bool], WeatherState]:
    return lambda _s, _day: state


# Order matters: first match wins
RULES: Sequence[Rule] = (
    (
        _has("thunder"),
        lambda s, _day: WeatherState.LIGHTNING_RAINY
        if ("rain" in s or "showers" in s)
        else WeatherState.LIGHTNING,
    ),
    (_has("sunny"), _fixed(WeatherState.SUNNY)),
    (
        _has("clear"),
        lambda _s, day: WeatherState.SUNNY if day else WeatherState.CLEAR_NIGHT,
    ),
    (_has("partly"), _fixed(WeatherState.PARTLY_CLOUDY)),
    (_has("cloud"), _fixed(WeatherState.CLOUDY)),
    (_has("fog", "mist", "haze"), _fixed(WeatherState.FOG)),
    (lambda s, _day: "snow" in s and "rain" in s, _fixed(WeatherState.SNOWY_RAINY)),
    (_has("snow", "flurr"), _fixed(WeatherState.SNOWY)),
    (_has("sleet", "wintry"), _fixed(WeatherState.SNOWY_RAINY)),
    (_has("hail"), _fixed(WeatherState.HAIL)),
    (_has("pour", "heavy"), _fixed(WeatherState.POURING)),
    (_has("rain", "showers", "drizzle"), _fixed(WeatherState.RAINY)),
    (_has("wind"), _fixed(WeatherState.WINDY)),
)


# Map text → weather state
def classify(short_forecast: str | None, is_daytime: bool) -> WeatherState:
    s = (short_forecast or "").lower()
    for matches, result in RULES:
        if matches(s, bool(is_daytime)):
            return result(s, bool(is_daytime))
    return WeatherState.UNKNOWN


def background_name(state: WeatherState | str) -> str:
    return f"{state}_cr80.png"


def find_background(state: WeatherState | str, search_dirs: Iterable[Path | str] | None = None) -> Path | None:
    """
    Looks in ``search_dirs`` first, then upward from this file for
    assets/backgrounds/<state>_cr80.png
    """
    name = background_name(state)
    for d in search_dirs or ():
        p = Path(d) / name
        if p.is_file():
            return p
    here = Path(__file__).resolve()
    for up in range(1, 5):
        p = here.parents[up-1] / "assets" / "backgrounds" / name
        if p.is_file():
            return p
    return None
