from __future__ import annotations

import logging
import shutil

from ..context import SetupContext

logger = logging.getLogger(__name__)


class CleanupStep:
    step_id = "cleanup"
    title = "Cleaning Up Downloaded Files"

    def run(self, ctx: SetupContext) -> None:
        downloads = ctx.settings.downloads_dir
        targets = [
            downloads / str(ctx.manifest.section("fonts").get("checkout") or "nerd-fonts"),
            downloads / str(ctx.manifest.section("neovim").get("archive") or "nvim-linux-x86_64.tar.gz"),
        ]
        for path in targets:
            if not path.exists():
                continue
            if ctx.dry_run:
                logger.info("Would remove %s", path)
            elif path.is_dir():
                shutil.rmtree(path)
                logger.info("Removed %s", path)
            else:
                path.unlink()
                logger.info("Removed %s", path)
