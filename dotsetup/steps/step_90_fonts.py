from __future__ import annotations

import logging
import shutil

from ..context import SetupContext
from ..lib.command import require_command, run_cmd
from ..lib.git import clone_if_missing

logger = logging.getLogger(__name__)


class InstallNerdFontsStep:
    step_id = "fonts"
    title = "Building and Installing Nerd Fonts"

    def run(self, ctx: SetupContext) -> None:
        cfg = ctx.manifest.section("fonts")
        fonts_dir = ctx.settings.under_home(str(cfg.get("dest") or ".local/share/fonts"))
        installed_glob = str(cfg.get("installed_glob") or "MesloLGS*")

        if fonts_dir.is_dir() and any(fonts_dir.glob(installed_glob)):
            logger.info("Nerd Fonts already installed in %s", fonts_dir)
            return

        require_command("fc-cache", dry_run=ctx.dry_run)
        checkout = ctx.settings.downloads_dir / str(cfg.get("checkout") or "nerd-fonts")
        clone_if_missing(str(cfg["repo"]), checkout, depth=1, dry_run=ctx.dry_run)

        build = checkout / "build"
        if ctx.dry_run:
            logger.info("Would build %s and copy into %s", cfg.get("pattern"), fonts_dir)
        else:
            fonts_dir.mkdir(parents=True, exist_ok=True)
            build.chmod(build.stat().st_mode | 0o111)
        run_cmd([str(build), str(cfg.get("pattern") or "Meslo/S/*")], cwd=str(checkout), dry_run=ctx.dry_run)

        if not ctx.dry_run:
            for font in sorted((checkout / "out").glob("*")):
                if font.is_file():
                    shutil.copy2(font, fonts_dir / font.name)

        # Rebuild the font cache so the new fonts are picked up.
        run_cmd(["fc-cache", "-f", "-v"], dry_run=ctx.dry_run)
