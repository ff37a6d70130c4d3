"""Fixed card layout.

Every block sits in its own region of the canvas, so nothing here checks for
collisions. The only measured placement is the description, which is laid out
upward from the bottom edge so that wrapped text can never run off the card.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Protocol, Sequence

from forecastcard.models import DailySummary, TargetDate, TextBlock

# CR80 is 640x1006 pt; the card is rendered landscape
CARD_WIDTH = 1006
CARD_HEIGHT = 640


class TextMeasurer(Protocol):
    def wrap(self, text: str, font_size: int, max_width: int, max_lines: int) -> List[str]: ...

    def block_height(self, lines: Sequence[str], font_size: int) -> int: ...

    def cap_height(self, font_size: int) -> int: ...


@dataclass(frozen=True)
class CardLayout:
    width: int = CARD_WIDTH
    height: int = CARD_HEIGHT
    margin: int = 30
    header_size: int = 36
    temperature_size: int = 96
    description_size: int = 28
    description_max_lines: int = 3
    # line-height slack on the measured description block
    description_padding: float = 1.1

    @property
    def content_width(self) -> int:
        return self.width - 2 * self.margin


def padded_height(height: float, padding: float) -> int:
    # round first so float noise (100 * 1.1 == 110.00000000000001) does not add a pixel
    return math.ceil(round(height * padding, 6))


def place_from_bottom(height: float, canvas_height: int, bottom_margin: int, padding: float = 1.1) -> int:
    return max(0, canvas_height - bottom_margin - padded_height(height, padding))


def fit_description(text: str, measurer: TextMeasurer, layout: CardLayout) -> tuple[List[str], int]:
    """Wrap ``text`` and drop trailing lines until the padded block fits above the bottom margin."""
    available = layout.height - layout.margin
    lines: List[str] = []
    height = 0
    for max_lines in range(layout.description_max_lines, 0, -1):
        lines = measurer.wrap(text, layout.description_size, layout.content_width, max_lines)
        height = measurer.block_height(lines, layout.description_size)
        if padded_height(height, layout.description_padding) <= available:
            break
    return lines, height


def temperature_y(measurer: TextMeasurer, layout: CardLayout) -> int:
    cap = measurer.cap_height(layout.temperature_size)
    return max(0, layout.height // 2 - cap // 2)


def layout_card(
    summary: DailySummary,
    target: TargetDate,
    measurer: TextMeasurer,
    title: str = "KPDX Forecast",
    layout: CardLayout = CardLayout(),
) -> List[TextBlock]:
    m = layout.margin
    half = layout.width // 2

    # header and date share a row by alignment only
    header = TextBlock(title, m, m, layout.content_width, layout.header_size, "left")
    date_block = TextBlock(target.isoformat(), m, m, layout.content_width, layout.header_size, "right")

    ty = temperature_y(measurer, layout)
    low = TextBlock(summary.low, m, ty, half - m, layout.temperature_size, "left")
    high = TextBlock(summary.high, half, ty, half - m, layout.temperature_size, "right")

    lines, height = fit_description(summary.description, measurer, layout)
    dy = place_from_bottom(height, layout.height, m, layout.description_padding)
    description = TextBlock(
        summary.description,
        m,
        dy,
        layout.content_width,
        layout.description_size,
        "center",
        lines=tuple(lines),
    )
    return [header, date_block, low, high, description]
