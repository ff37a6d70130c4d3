from __future__ import annotations
import logging
import os
import tempfile
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Sequence

from PIL import Image, ImageDraw, ImageFont

from forecastcard.errors import BackgroundMissing
from forecastcard.icons import find_background
from forecastcard.models import TextBlock, WeatherState

logger = logging.getLogger(__name__)

ELLIPSIS = "…"


def _default_file_mode() -> int:
    # what open() would give; mkstemp always creates 0600
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


# ---------- font helpers ----------
@lru_cache(maxsize=16)
def _load_font(preferred: str | None, size: int):
    candidates: list[Path] = []
    if preferred:
        candidates.append(Path(preferred))

    here = Path(__file__).resolve()
    # Try repo assets
    for up in range(1, 5):
        candidates.append(here.parents[up-1] / "assets" / "fonts" / "Inter-Regular.ttf")

    # Common Linux / macOS fonts
    candidates += [
        Path("/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"),
        Path("/usr/share/fonts/dejavu/DejaVuSans.ttf"),
        Path("/Library/Fonts/Arial.ttf"),
        Path("/System/Library/Fonts/Supplemental/Arial.ttf"),
    ]

    for p in candidates:
        if not p.exists():
            continue
        try:
            return ImageFont.truetype(str(p), size=size)
        except OSError:
            logger.debug("[render] unreadable font %s", p)

    logger.warning("[render] no TTF font found; using the Pillow default font")
    return ImageFont.load_default(size=size)

# ---------- background ----------
def load_background(path: Path, size: tuple[int, int]) -> Image.Image:
    try:
        with Image.open(path) as im:
            bg = im.convert("RGB")
    except (OSError, ValueError) as exc:
        raise BackgroundMissing(f"cannot read background {path}: {exc}") from exc
    if bg.size != size:
        bg = bg.resize(size, Image.LANCZOS)
    return bg

# ---------- canvas ----------
class Canvas:
    """Fixed-size card surface. Also the layout's text measurer."""

    def __init__(self, width: int, height: int, font_path: str | None = None, line_gap: int = 6):
        self.width = width
        self.height = height
        self.font_path = font_path
        self.line_gap = line_gap
        self._bg_color = (255, 255, 255)
        self.img = Image.new("RGB", (width, height), self._bg_color)
        self.draw = ImageDraw.Draw(self.img)
        self.finalized = False

    def font(self, size: int):
        return _load_font(self.font_path, size)

    def text_width(self, text: str, font_size: int) -> int:
        box = self.draw.textbbox((0, 0), text, font=self.font(font_size))
        return box[2] - box[0]

    def line_height(self, font_size: int) -> int:
        # bottom of the tallest glyphs when drawn at y=0
        return self.draw.textbbox((0, 0), "Ag", font=self.font(font_size))[3]

    def cap_height(self, font_size: int) -> int:
        box = self.draw.textbbox((0, 0), "H", font=self.font(font_size))
        return box[3] - box[1]

    def block_height(self, lines: Sequence[str], font_size: int) -> int:
        if not lines:
            return 0
        return len(lines) * self.line_height(font_size) + (len(lines) - 1) * self.line_gap

    def wrap(self, text: str, font_size: int, max_width: int, max_lines: int = 3, ellipsis: bool = True) -> list[str]:
        """
        Returns a list of lines that fit max_width. Adds ellipsis on the last line if truncated.
        """
        words = (text or "").split()
        if not words:
            return []
        lines: list[str] = []
        cur = words[0]
        for w in words[1:]:
            trial = cur + " " + w
            if self.text_width(trial, font_size) <= max_width:
                cur = trial
            else:
                lines.append(cur)
                cur = w
        lines.append(cur)

        if len(lines) <= max_lines:
            return lines
        lines = lines[:max_lines]
        if ellipsis:
            last = lines[-1]
            while last and self.text_width(last + ELLIPSIS, font_size) > max_width:
                last = last.rsplit(" ", 1)[0] if " " in last else last[:-1]
            lines[-1] = last + ELLIPSIS
        return lines

    def paste_background(self, image: Image.Image) -> None:
        self._check_open()
        self.img.paste(image, (0, 0))

    def draw_block(self, block: TextBlock, fill=(0, 0, 0)) -> None:
        self._check_open()
        font = self.font(block.font_size)
        lines = list(block.lines) or [block.text]
        yy = block.y
        step = self.line_height(block.font_size) + self.line_gap
        for ln in lines:
            w = self.text_width(ln, block.font_size)
            if block.align == "right":
                x = block.x + block.width - w
            elif block.align == "center":
                x = block.x + (block.width - w) // 2
            else:
                x = block.x
            self.draw.text((x, yy), ln, font=font, fill=fill)
            yy += step

    def draw_blocks(self, blocks: Iterable[TextBlock]) -> None:
        for block in blocks:
            self.draw_block(block)

    def save_pdf(self, path: Path | str) -> Path:
        """Finalize the card as a one-page PDF at 72 dpi (1 px = 1 pt).

        The file appears atomically; a failed write leaves nothing behind.
        """
        self._check_open()
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=f".{path.stem}.", suffix=".part", dir=path.parent)
        try:
            with os.fdopen(fd, "wb") as fh:
                self.img.save(fh, format="PDF", resolution=72.0)
            os.chmod(tmp, _default_file_mode())
            os.replace(tmp, path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise
        self.finalized = True
        return path

    def _check_open(self) -> None:
        if self.finalized:
            raise RuntimeError("canvas already written; create a new one")


def apply_background(canvas: Canvas, state: WeatherState | str, search_dirs: Iterable[Path | str] | None = None) -> bool:
    """Best-effort full-bleed background; returns whether one was drawn."""
    path = find_background(state, search_dirs)
    if path is None:
        logger.warning("[render] no background image for state %s", state)
        return False
    try:
        image = load_background(path, (canvas.width, canvas.height))
    except BackgroundMissing as exc:
        logger.warning("[render] %s; continuing without background", exc)
        return False
    canvas.paste_background(image)
    return True
