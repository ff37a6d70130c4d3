import math
import unittest
from datetime import date, datetime, timezone

from forecastcard.layout import CardLayout, fit_description, layout_card, padded_height, place_from_bottom
from forecastcard.models import DailySummary, ForecastPeriod, TargetDate, WeatherState


class FakeMeasurer:
    """Three words per line; a line is as tall as its font size."""

    gap = 6

    def wrap(self, text, font_size, max_width, max_lines):
        words = text.split()
        lines = [" ".join(words[i:i + 3]) for i in range(0, len(words), 3)]
        if len(lines) > max_lines:
            lines = lines[:max_lines]
            lines[-1] += "…"
        return lines

    def block_height(self, lines, font_size):
        if not lines:
            return 0
        return len(lines) * font_size + (len(lines) - 1) * self.gap

    def cap_height(self, font_size):
        return int(font_size * 0.7)


def _summary(description="Sunny."):
    period = ForecastPeriod("Today", datetime(2025, 11, 30, 12, tzinfo=timezone.utc), True, "Sunny", 72, "F")
    return DailySummary(period, WeatherState.SUNNY, "58F", "72F", description)


TARGET = TargetDate(date(2025, 11, 30), 2025, 11, 30)


class TestPlaceFromBottom(unittest.TestCase):
    def test_padding_and_margin(self):
        self.assertEqual(place_from_bottom(100, 640, 30), 640 - 30 - 110)

    def test_padding_ignores_float_noise(self):
        # 100 * 1.1 is 110.00000000000001 in floating point
        self.assertEqual(padded_height(100, 1.1), 110)
        self.assertEqual(padded_height(30, 1.1), 33)
        self.assertEqual(padded_height(28, 1.1), 31)

    def test_clamped_at_top(self):
        self.assertEqual(place_from_bottom(1000, 640, 30), 0)


class TestLayoutCard(unittest.TestCase):
    def setUp(self):
        self.blocks = layout_card(_summary(), TARGET, FakeMeasurer())
        self.header, self.date, self.low, self.high, self.desc = self.blocks

    def test_header_and_date_share_top_row(self):
        self.assertEqual((self.header.x, self.header.y, self.header.align), (30, 30, "left"))
        self.assertEqual(self.header.text, "KPDX Forecast")
        self.assertEqual(self.date.text, "2025-11-30")
        self.assertEqual((self.date.x, self.date.y, self.date.align), (30, 30, "right"))
        self.assertEqual(self.date.x + self.date.width, 1006 - 30)
        self.assertEqual(self.date.font_size, self.header.font_size)

    def test_temperatures_centered_vertically(self):
        cap = int(96 * 0.7)
        self.assertEqual(self.low.y, 320 - cap // 2)
        self.assertEqual(self.high.y, self.low.y)
        self.assertEqual((self.low.text, self.low.x, self.low.align), ("58F", 30, "left"))
        self.assertEqual((self.high.text, self.high.x, self.high.align), ("72F", 503, "right"))
        self.assertEqual(self.high.x + self.high.width, 1006 - 30)

    def test_temperature_y_clamped(self):
        layout = CardLayout(height=40, temperature_size=200)
        blocks = layout_card(_summary(), TARGET, FakeMeasurer(), layout=layout)
        self.assertEqual(blocks[2].y, 0)

    def test_description_sits_on_bottom_margin(self):
        self.assertEqual(self.desc.lines, ("Sunny.",))
        self.assertEqual(self.desc.align, "center")
        self.assertEqual(self.desc.y, 640 - 30 - math.ceil(28 * 1.1))

    def test_long_description_stays_on_card(self):
        text = " ".join(["word"] * 40)
        layout = CardLayout(description_size=250)
        blocks = layout_card(_summary(text), TARGET, FakeMeasurer(), layout=layout)
        desc = blocks[-1]
        height = FakeMeasurer().block_height(desc.lines, 250)
        self.assertEqual(len(desc.lines), 2)
        self.assertGreaterEqual(desc.y, 0)
        self.assertLessEqual(desc.y + math.ceil(height * 1.1), 640 - 30)

    def test_multi_line_description_moves_up(self):
        text = " ".join(["word"] * 7)
        lines, height = fit_description(text, FakeMeasurer(), CardLayout())
        self.assertEqual(len(lines), 3)
        self.assertEqual(height, 3 * 28 + 2 * 6)
        desc = layout_card(_summary(text), TARGET, FakeMeasurer())[-1]
        self.assertLess(desc.y, self.desc.y)

    def test_custom_title(self):
        blocks = layout_card(_summary(), TARGET, FakeMeasurer(), title="PDX Card")
        self.assertEqual(blocks[0].text, "PDX Card")


if __name__ == "__main__":
    unittest.main()
