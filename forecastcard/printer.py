from __future__ import annotations
import logging
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional

from forecastcard.errors import PrintFailure

logger = logging.getLogger(__name__)

MEDIA = "CR80"


def build_lp_command(path: Path | str, printer: str, server: Optional[str] = None, lp: str = "lp") -> List[str]:
    cmd = [lp, "-d", printer]
    if server:
        cmd += ["-h", server]
    cmd += ["-o", f"media={MEDIA}", "-o", "fit-to-page", str(path)]
    return cmd


def submit_print_job(path: Path | str, printer: str, server: Optional[str] = None, timeout: float = 60) -> str:
    """Queue ``path`` as a single CR80 job; returns lp's output (usually the request id)."""
    lp = shutil.which("lp")
    if lp is None:
        raise PrintFailure("lp executable not found; ensure CUPS client tools are installed")
    cmd = build_lp_command(path, printer, server, lp=lp)
    logger.debug("[print] %s", " ".join(cmd))
    try:
        proc = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout, check=False)
    except (OSError, subprocess.TimeoutExpired) as exc:
        raise PrintFailure(f"lp did not complete: {exc}") from exc
    if proc.returncode != 0:
        detail = (proc.stderr or proc.stdout or "").strip()
        raise PrintFailure(f"lp exited with {proc.returncode}: {detail}")
    return (proc.stdout or "").strip()
