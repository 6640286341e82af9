from __future__ import annotations

import logging
from pathlib import Path

from ..console import notice
from ..context import SetupContext
from ..lib.command import require_command, run_cmd, sudo, write_root_file
from ..lib.dotfiles import move_aside
from ..lib.git import clone_if_missing
from ..lib.net import download
from ..lib.pkg import pm_purge

logger = logging.getLogger(__name__)

DEFAULT_NVIM_URL = "https://github.com/neovim/neovim/releases/latest/download/nvim-linux-x86_64.tar.gz"


class PurgeOldEditorsStep:
    step_id = "purge-editors"
    title = "Purging Old Vim/Neovim to prevent conflicts"

    def run(self, ctx: SetupContext) -> None:
        pm_purge(
            ctx.profile,
            ctx.manifest.purge_editors,
            non_interactive=ctx.non_interactive,
            dry_run=ctx.dry_run,
        )


class InstallNeovimStep:
    step_id = "neovim-install"
    title = "Installing latest Neovim release"

    def run(self, ctx: SetupContext) -> None:
        cfg = ctx.manifest.section("neovim")
        url = str(cfg.get("url") or DEFAULT_NVIM_URL)
        archive = ctx.settings.downloads_dir / str(cfg.get("archive") or Path(url).name)
        install_dir = Path(str(cfg.get("install_dir") or "/opt/nvim-linux-x86_64"))
        profile_script = str(cfg.get("profile_script") or "/etc/profile.d/nvim.sh")

        require_command("tar", dry_run=ctx.dry_run)
        download(url, archive, dry_run=ctx.dry_run)

        # The tarball unpacks into a directory named after itself under install_dir's parent.
        run_cmd(sudo(["rm", "-rf", str(install_dir)]), dry_run=ctx.dry_run)
        run_cmd(sudo(["tar", "-C", str(install_dir.parent), "-xzf", str(archive)]), dry_run=ctx.dry_run)

        write_root_file(
            profile_script,
            f'export PATH="$PATH:{install_dir}/bin"\n',
            dry_run=ctx.dry_run,
        )
        notice("Neovim PATH configured. You may need to log out and back in.")


class InstallNvChadStep:
    step_id = "nvchad"
    title = "Installing NvChad Neovim Configuration"

    def run(self, ctx: SetupContext) -> None:
        cfg = ctx.manifest.section("nvchad")
        nvim_dir = ctx.settings.config_dir / "nvim"
        marker = str(cfg.get("marker") or "lua/chadrc.lua")

        if (nvim_dir / marker).exists():
            logger.info("NvChad config already present at %s", nvim_dir)
            return

        moved = move_aside(nvim_dir, dry_run=ctx.dry_run)
        if moved:
            notice(f"Existing Neovim config backed up to {moved}")

        clone_if_missing(str(cfg["repo"]), nvim_dir, dry_run=ctx.dry_run)
