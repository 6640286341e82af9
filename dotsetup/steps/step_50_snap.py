from __future__ import annotations

import logging

from ..context import SetupContext
from ..lib.command import require_command, run_cmd, sudo

logger = logging.getLogger(__name__)


class InstallSnapPackagesStep:
    step_id = "snap"
    title = "Installing Snap Packages"

    def _installed(self, name: str, ctx: SetupContext) -> bool:
        if ctx.dry_run:
            return False
        return run_cmd(["snap", "list", name], check=False).ok

    def run(self, ctx: SetupContext) -> None:
        require_command("snap", hint="install snapd first (core step)", dry_run=ctx.dry_run)

        for entry in ctx.manifest.entries("snaps"):
            name = str(entry.get("name") or "").strip()
            if not name:
                continue
            if self._installed(name, ctx):
                logger.info("Snap %s already installed", name)
                continue
            argv = ["snap", "install", name]
            if entry.get("classic"):
                argv.append("--classic")
            run_cmd(sudo(argv), dry_run=ctx.dry_run)
