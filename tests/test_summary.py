import unittest
from datetime import datetime, timedelta, timezone

from forecastcard.models import ForecastPeriod, WeatherState
from forecastcard.summary import choose_period, summarize

NOON = datetime(2025, 11, 30, 12, tzinfo=timezone.utc)


def _period(name="Today", is_day=True, short="Sunny", temp=72, unit="F", start=NOON):
    return ForecastPeriod(
        name=name,
        start_time=start,
        is_daytime=is_day,
        short_forecast=short,
        temperature=temp,
        temperature_unit=unit,
    )


def _hourly(temps, unit="F"):
    base = datetime(2025, 11, 30, 8, tzinfo=timezone.utc)
    return [
        _period(name="", short="Sunny", temp=t, unit=unit, start=base + timedelta(hours=i))
        for i, t in enumerate(temps)
    ]


class TestSummarize(unittest.TestCase):
    def test_sunny_day_with_hourly(self):
        s = summarize([_period()], _hourly([58, 60, 62, 64, 66, 68, 70, 72, 70, 65]))
        self.assertEqual(s.state, WeatherState.SUNNY)
        self.assertEqual(s.low, "58F")
        self.assertEqual(s.high, "72F")
        self.assertEqual(s.description, "Sunny.")

    def test_fallback_without_hourly(self):
        s = summarize([_period(temp=72, unit="F")], [])
        self.assertEqual(s.low, "72F")
        self.assertEqual(s.high, s.low)

    def test_fallback_when_hourly_has_no_temperatures(self):
        s = summarize([_period(temp=45)], _hourly([None, None]))
        self.assertEqual((s.low, s.high), ("45F", "45F"))

    def test_skips_missing_hourly_temperatures(self):
        s = summarize([_period()], _hourly([None, 50, 41, None]))
        self.assertEqual((s.low, s.high), ("41F", "50F"))

    def test_unit_from_hourly_then_period(self):
        hourly = _hourly([3, 9], unit="")
        hourly[1] = _period(temp=9, unit="C")
        s = summarize([_period(unit="F")], hourly)
        self.assertEqual((s.low, s.high), ("3C", "9C"))

        s = summarize([_period(unit="F")], _hourly([3, 9], unit=""))
        self.assertEqual(s.low, "3F")

    def test_float_temperatures(self):
        s = summarize([_period()], _hourly([58.0, 61.5]))
        self.assertEqual((s.low, s.high), ("58F", "61.5F"))

    def test_night_thunder(self):
        s = summarize([_period(name="Tonight", is_day=False, short="Thunderstorms likely")], [])
        self.assertEqual(s.state, WeatherState.LIGHTNING)
        self.assertEqual(s.description, "Thunderstorms likely.")

    def test_missing_period_temperature(self):
        s = summarize([_period(temp=None)], [])
        self.assertEqual(s.low, "--F")


class TestChoosePeriod(unittest.TestCase):
    def test_prefers_first_daytime(self):
        periods = [_period("Tonight", is_day=False), _period("Today"), _period("Later")]
        self.assertEqual(choose_period(periods).name, "Today")

    def test_first_when_no_daytime(self):
        periods = [_period("Tonight", is_day=False), _period("Overnight", is_day=False)]
        self.assertEqual(choose_period(periods).name, "Tonight")


if __name__ == "__main__":
    unittest.main()
