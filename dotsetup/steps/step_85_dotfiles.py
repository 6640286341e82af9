from __future__ import annotations

import logging

from ..context import SetupContext
from ..lib.dotfiles import sync_dotfiles

logger = logging.getLogger(__name__)


class CopyDotfilesStep:
    step_id = "dotfiles"
    title = "Copying Local Configuration Files"

    def run(self, ctx: SetupContext) -> None:
        records = sync_dotfiles(
            ctx.settings.dotfiles_dir,
            ctx.settings.home,
            ctx.manifest.entries("dotfiles"),
            dry_run=ctx.dry_run,
        )
        copied = [r for r in records if r.copied]
        logger.info(
            "Dotfiles synced from %s (copied=%d backups=%d unchanged=%d)",
            ctx.settings.dotfiles_dir,
            len(copied),
            len([r for r in copied if r.backup]),
            len(records) - len(copied),
        )
