from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from forecastcard.config import Config, parse_args
from forecastcard.errors import ConfigError, ForecastCardError, PrintFailure, RenderFailure
from forecastcard.layout import CARD_HEIGHT, CARD_WIDTH, layout_card
from forecastcard.models import DailySummary, ForecastPeriod, RunContext
from forecastcard.nws import NWSClient
from forecastcard.printer import submit_print_job
from forecastcard.renderer.pillow_renderer import Canvas, apply_background
from forecastcard.summary import summarize
from forecastcard.utils import resolve_timezone
from forecastcard.window import build_context, filter_to_target_date, reference_instant, select_daily_periods

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def build_summary(
    forecast: Sequence[ForecastPeriod],
    hourly: Sequence[ForecastPeriod],
    ctx: RunContext,
) -> DailySummary:
    daily = select_daily_periods(forecast, ctx.target)
    daily_hourly = filter_to_target_date(hourly, ctx.target)
    summary = summarize(daily, daily_hourly)
    if not daily_hourly:
        logger.warning("[summary] no hourly periods on %s; low/high fall back to %r",
                       ctx.target.isoformat(), summary.chosen_period.name)
    return summary


def render_document(summary: DailySummary, ctx: RunContext, out_path: Path, cfg: Config) -> Path:
    try:
        canvas = Canvas(CARD_WIDTH, CARD_HEIGHT, cfg.font_path)
        apply_background(canvas, summary.state, cfg.background_dirs)
        canvas.draw_blocks(layout_card(summary, ctx.target, canvas, title=cfg.title))
        return canvas.save_pdf(out_path)
    except (OSError, ValueError) as exc:
        raise RenderFailure(f"could not render {out_path}: {exc}") from exc


def run(cfg: Config, client: Optional[NWSClient] = None) -> Path:
    tz = resolve_timezone(cfg.timezone)
    # resolved once; every filter below uses this same target day
    ctx = build_context(reference_instant(cfg.datetime_override, tz), tz)

    with client or NWSClient(cfg.lat, cfg.lon, cfg.user_agent) as nws:
        forecast = nws.forecast()
        hourly = nws.hourly_or_empty()

    summary = build_summary(forecast, hourly, ctx)
    logger.info("[summary] %s: %s low %s high %s",
                summary.chosen_period.name, summary.state, summary.low, summary.high)

    path = render_document(summary, ctx, cfg.output_path(ctx.target.compact()), cfg)
    logger.info("PDF written to %s", path)

    if cfg.printer:
        try:
            job = submit_print_job(path, cfg.printer, cfg.print_server)
            logger.info("[print] submitted to %s: %s", cfg.printer, job or "ok")
        except PrintFailure as exc:
            logger.error("[print] %s", exc)
    return path


def main(argv: list[str] | None = None) -> int:
    cfg = parse_args(argv)
    logging.basicConfig(level=cfg.log_level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    try:
        run(cfg)
    except ConfigError as exc:
        logger.error("configuration error: %s", exc)
        return 2
    except RenderFailure:
        logger.exception("rendering failed")
        return 1
    except ForecastCardError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
