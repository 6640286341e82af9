from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .command import require_command, run_cmd

logger = logging.getLogger(__name__)


def clone_if_missing(url: str, dest: Path, *, depth: Optional[int] = None, dry_run: bool = False) -> bool:
    """Clone url into dest unless dest already exists. Returns True if cloned."""

    if dest.exists():
        logger.info("%s already exists, skipping clone", dest)
        return False

    require_command("git", dry_run=dry_run)
    argv = ["git", "clone"]
    if depth:
        argv += [f"--depth={depth}"]
    argv += [url, str(dest)]
    if not dry_run:
        dest.parent.mkdir(parents=True, exist_ok=True)
    run_cmd(argv, dry_run=dry_run)
    return True
