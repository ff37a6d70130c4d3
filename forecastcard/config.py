from __future__ import annotations
import argparse
import os
from dataclasses import dataclass, field
from pathlib import Path

from forecastcard.window import OVERRIDE_ENV

# KPDX, Portland International Airport
DEFAULT_LAT = 45.5886
DEFAULT_LON = -122.5975

STATIC_OUTPUT_NAME = "kpdx_forecast_cr80.pdf"


@dataclass
class Config:
    # Location
    lat: float
    lon: float
    title: str
    timezone: str | None

    # Output document
    out_dir: Path
    name_by_date: bool
    font_path: str | None
    background_dirs: list[Path] = field(default_factory=list)

    # Printing (optional)
    printer: str | None = None
    print_server: str | None = None

    # Misc
    user_agent: str = "kpdx-forecast-app (github.com)"
    log_level: str = "INFO"
    datetime_override: str | None = None

    def output_path(self, date_stamp: str) -> Path:
        """``date_stamp`` is the target date as YYYYMMDD."""
        if self.name_by_date:
            return self.out_dir / f"kpdx_forecast_{date_stamp}.pdf"
        return self.out_dir / STATIC_OUTPUT_NAME


def parse_args(argv: list[str] | None = None, environ: dict[str, str] | None = None) -> Config:
    environ = os.environ if environ is None else environ
    p = argparse.ArgumentParser("forecastcard", description="Render today's forecast onto a CR80 card.")

    loc = p.add_argument_group("Location")
    loc.add_argument("--lat", type=float, default=DEFAULT_LAT, help="Latitude")
    loc.add_argument("--lon", type=float, default=DEFAULT_LON, help="Longitude")
    loc.add_argument("--title", type=str, default="KPDX Forecast", help="Header text printed on the card")
    loc.add_argument("--tz", "--timezone", dest="timezone", type=str, default=None,
                     help="IANA timezone name (e.g. 'America/Los_Angeles'); defaults to system local time")

    out = p.add_argument_group("Output")
    out.add_argument("--out-dir", type=Path, default=Path("."), help="Directory the PDF is written to")
    out.add_argument("--name-by-date", action="store_true",
                     help="Name the PDF after the target date (YYYYMMDD) instead of a fixed name")
    out.add_argument("--background-dir", dest="background_dirs", type=Path, action="append", default=[],
                     help="Folder holding <state>_cr80.png backgrounds (repeatable)")
    out.add_argument("--font", dest="font_path", type=str, default=None, help="TTF font file")

    prn = p.add_argument_group("Printing")
    prn.add_argument("--printer", type=str, default=None, help="CUPS destination; omit to skip printing")
    prn.add_argument("--print-server", type=str, default=None, help="CUPS server host[:port]")

    misc = p.add_argument_group("Misc")
    misc.add_argument("--user-agent", type=str, default="kpdx-forecast-app (github.com)")
    misc.add_argument("--log-level", type=str, default="INFO",
                      choices=["DEBUG", "INFO", "WARNING", "ERROR"])

    args = p.parse_args(argv)

    return Config(
        lat=args.lat,
        lon=args.lon,
        title=args.title,
        timezone=args.timezone,
        out_dir=args.out_dir,
        name_by_date=args.name_by_date,
        font_path=args.font_path,
        background_dirs=args.background_dirs,
        printer=args.printer,
        print_server=args.print_server,
        user_agent=args.user_agent,
        log_level=args.log_level,
        datetime_override=environ.get(OVERRIDE_ENV) or None,
    )
