from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from ..context import SetupContext
from ..lib.command import run_cmd
from ..lib.dotfiles import ensure_line
from ..lib.net import download

logger = logging.getLogger(__name__)

CARGO_PATH_LINE = 'export PATH="$HOME/.cargo/bin:$PATH"'


class SetupRustStep:
    step_id = "rust"
    title = "Installing Rust and Cargo Packages"

    def _install_rustup(self, ctx: SetupContext) -> None:
        rustup = ctx.settings.cargo_bin / "rustup"
        if rustup.exists():
            logger.info("rustup already installed at %s", rustup)
            return

        url = str(ctx.manifest.section("rust").get("rustup_url") or "https://sh.rustup.rs")
        with tempfile.TemporaryDirectory(prefix="dotsetup-rustup-") as tmp:
            script = download(url, Path(tmp) / "rustup-init.sh", dry_run=ctx.dry_run)
            run_cmd(["sh", str(script), "-y"], dry_run=ctx.dry_run)

    def run(self, ctx: SetupContext) -> None:
        self._install_rustup(ctx)

        cargo = ctx.settings.cargo_bin / "cargo"
        for crate in ctx.manifest.crates:
            if (ctx.settings.cargo_bin / crate).exists():
                logger.info("Crate %s already installed", crate)
                continue
            run_cmd([str(cargo), "install", crate], dry_run=ctx.dry_run)

        zshrc = ctx.settings.home / ".zshrc"
        if ensure_line(zshrc, CARGO_PATH_LINE, comment="Add Cargo to PATH", dry_run=ctx.dry_run):
            logger.info("Rust/Cargo PATH added to %s", zshrc)
