from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler

from .console import console as ui_console
from .lib.env import default_log_path

FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _console_level(verbose: bool) -> int:
    return logging.DEBUG if verbose else logging.INFO


def _open_file_handler(requested: str) -> tuple[logging.Handler, str]:
    try:
        Path(requested).parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(requested), requested
    except OSError:
        fallback = str(Path.cwd() / "dotsetup.log")
        return logging.FileHandler(fallback), fallback


def configure_logging(
    log_path: Optional[str] = None,
    *,
    verbose: bool = False,
    also_console: bool = True,
) -> str:
    """Configure logging for a run.

    The log file always records DEBUG, which includes captured command
    output. The console shows INFO, or DEBUG with ``verbose``. If the
    requested path is not writable we fall back to a file in the working
    directory and keep going.

    Calling this again only adjusts the console level.
    Returns the actual file path being used.
    """

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    if getattr(root, "_dotsetup_configured", False):
        existing = getattr(root, "_dotsetup_console", None)
        if existing is not None:
            existing.setLevel(_console_level(verbose))
        return getattr(root, "_dotsetup_log_path")

    requested = str(log_path or default_log_path())
    file_handler, chosen_path = _open_file_handler(requested)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z"))
    root.addHandler(file_handler)

    console_handler: Optional[logging.Handler] = None
    if also_console:
        console_handler = RichHandler(console=ui_console, show_time=False, show_path=False, markup=False)
        console_handler.setLevel(_console_level(verbose))
        root.addHandler(console_handler)

    setattr(root, "_dotsetup_configured", True)
    setattr(root, "_dotsetup_log_path", chosen_path)
    setattr(root, "_dotsetup_file", file_handler)
    setattr(root, "_dotsetup_console", console_handler)

    logging.getLogger(__name__).debug(
        "Logging initialized (requested=%s, actual=%s, verbose=%s)", requested, chosen_path, verbose
    )
    return chosen_path

