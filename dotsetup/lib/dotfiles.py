from __future__ import annotations

import logging
import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)

BACKUP_TS_FORMAT = "%Y%m%d_%H%M%S"


@dataclass(frozen=True)
class SyncRecord:
    source: Path
    destination: Path
    source_mtime: Optional[float]
    copied: bool
    backup: Optional[Path] = None
    reason: str = ""


def should_copy(src: Path, dst: Path) -> bool:
    if not src.exists():
        return False
    if not dst.exists():
        return True
    return src.stat().st_mtime > dst.stat().st_mtime


def should_backup(dst: Path, copy: bool) -> bool:
    return copy and dst.exists()


def backup_path(dst: Path, ts: Optional[str] = None) -> Path:
    ts = ts or time.strftime(BACKUP_TS_FORMAT)
    return dst.with_name(f"{dst.name}.bak.{ts}")


def sync_file(src: Path, dst: Path, *, dry_run: bool = False, ts: Optional[str] = None) -> SyncRecord:
    """Copy src over dst when src is newer, backing up an existing dst first."""

    src_mtime = src.stat().st_mtime if src.exists() else None
    if not src.exists():
        logger.warning("Dotfile source missing, skipping: %s", src)
        return SyncRecord(src, dst, None, copied=False, reason="source_missing")

    copy = should_copy(src, dst)
    if not copy:
        logger.info("Up to date: %s", dst)
        return SyncRecord(src, dst, src_mtime, copied=False, reason="up_to_date")

    backup: Optional[Path] = None
    if should_backup(dst, copy):
        backup = backup_path(dst, ts)

    if dry_run:
        if backup:
            logger.info("Would back up %s -> %s", dst, backup)
        logger.info("Would copy %s -> %s", src, dst)
        return SyncRecord(src, dst, src_mtime, copied=True, backup=backup, reason="dry_run")

    dst.parent.mkdir(parents=True, exist_ok=True)
    if backup:
        shutil.copy2(dst, backup)
        logger.info("Backed up %s -> %s", dst, backup)
    shutil.copy2(src, dst)
    logger.info("Copied %s -> %s", src, dst)
    return SyncRecord(src, dst, src_mtime, copied=True, backup=backup)


def sync_dotfiles(
    source_dir: Path,
    home: Path,
    entries: Iterable[Dict[str, Any]],
    *,
    dry_run: bool = False,
) -> List[SyncRecord]:
    # One timestamp per run so all backups of a sync share a suffix.
    ts = time.strftime(BACKUP_TS_FORMAT)
    records: List[SyncRecord] = []
    for entry in entries:
        source = str(entry.get("source") or "").strip()
        dest = str(entry.get("dest") or source).strip()
        if not source:
            continue
        records.append(sync_file(source_dir / source, home / dest.lstrip("/"), dry_run=dry_run, ts=ts))
    return records


def ensure_line(path: Path, line: str, *, comment: Optional[str] = None, dry_run: bool = False) -> bool:
    """Append line to path unless an identical line is already there. Returns True if written."""

    existing = path.read_text(encoding="utf-8").splitlines() if path.exists() else []
    if line in (l.strip() for l in existing):
        return False

    if dry_run:
        logger.info("Would append to %s: %s", path, line)
        return True

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as f:
        f.write("\n")
        if comment:
            f.write(f"# {comment}\n")
        f.write(line + "\n")
    logger.info("Appended to %s: %s", path, line)
    return True


def move_aside(path: Path, *, dry_run: bool = False, ts: Optional[str] = None) -> Optional[Path]:
    """Rename an existing path to a timestamped backup; returns the new path."""

    if not path.exists():
        return None
    target = backup_path(path, ts)
    if dry_run:
        logger.info("Would move %s -> %s", path, target)
        return target
    path.rename(target)
    logger.info("Moved %s -> %s", path, target)
    return target
