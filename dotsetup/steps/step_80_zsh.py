from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from ..context import SetupContext
from ..lib.command import run_cmd
from ..lib.git import clone_if_missing
from ..lib.net import download

logger = logging.getLogger(__name__)


class SetupZshStep:
    step_id = "zsh"
    title = "Setting up Zsh, Oh My Zsh, and Powerlevel10k"

    def _install_ohmyzsh(self, ctx: SetupContext) -> None:
        if ctx.settings.ohmyzsh_dir.exists():
            logger.info("Oh My Zsh already installed at %s", ctx.settings.ohmyzsh_dir)
            return

        url = str(ctx.manifest.section("zsh")["ohmyzsh_installer"])
        with tempfile.TemporaryDirectory(prefix="dotsetup-ohmyzsh-") as tmp:
            script = download(url, Path(tmp) / "install.sh", dry_run=ctx.dry_run)
            # --unattended: no shell change, no zsh launch at the end.
            # KEEP_ZSHRC leaves an already synced ~/.zshrc in place.
            run_cmd(
                ["sh", str(script), "--unattended"],
                env={"KEEP_ZSHRC": "yes"},
                dry_run=ctx.dry_run,
            )

    def run(self, ctx: SetupContext) -> None:
        self._install_ohmyzsh(ctx)

        custom = ctx.settings.zsh_custom_dir
        for plugin in ctx.manifest.section("zsh").get("plugins") or []:
            clone_if_missing(
                str(plugin["url"]),
                custom / str(plugin["dest"]),
                depth=plugin.get("depth"),
                dry_run=ctx.dry_run,
            )
