from __future__ import annotations

import logging
from pathlib import Path

from .command import require_command, run_cmd

logger = logging.getLogger(__name__)


def download(url: str, dest: Path, *, dry_run: bool = False) -> Path:
    """Fetch url to dest with curl (follows redirects, fails on HTTP errors)."""

    require_command("curl", dry_run=dry_run)
    if not dry_run:
        dest.parent.mkdir(parents=True, exist_ok=True)
    run_cmd(["curl", "-fsSL", url, "-o", str(dest)], dry_run=dry_run)
    return dest


def fetch_text(url: str, *, dry_run: bool = False) -> str:
    require_command("curl", dry_run=dry_run)
    return run_cmd(["curl", "-fsSL", url], dry_run=dry_run).stdout
