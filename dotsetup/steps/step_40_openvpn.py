from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from ..context import SetupContext
from ..lib.command import run_cmd, sudo, write_root_file
from ..lib.net import fetch_text
from ..lib.pkg import pm_install, pm_update

logger = logging.getLogger(__name__)


class SetupOpenVPNStep:
    step_id = "openvpn"
    title = "Installing OpenVPN"

    def _configure_apt_repo(self, ctx: SetupContext, cfg: Dict[str, Any]) -> None:
        keyring = str(cfg.get("keyring") or "/etc/apt/keyrings/openvpn.asc")
        source_list = str(cfg.get("source_list") or "/etc/apt/sources.list.d/openvpn3.list")

        if Path(source_list).exists() and Path(keyring).exists():
            logger.info("OpenVPN apt repository already configured (%s)", source_list)
            return

        codename = ctx.profile.codename or str(cfg.get("default_codename") or "bookworm")
        repo_url = str(cfg["repo_url"])

        run_cmd(sudo(["mkdir", "-p", str(Path(keyring).parent)]), dry_run=ctx.dry_run)
        key = fetch_text(str(cfg["key_url"]), dry_run=ctx.dry_run)
        write_root_file(keyring, key, dry_run=ctx.dry_run)
        write_root_file(
            source_list,
            f"deb [signed-by={keyring}] {repo_url} {codename} main\n",
            dry_run=ctx.dry_run,
        )
        pm_update(ctx.profile, non_interactive=ctx.non_interactive, dry_run=ctx.dry_run)

    def run(self, ctx: SetupContext) -> None:
        family = ctx.profile.family
        cfg = ctx.manifest.section("openvpn").get(family) or {}

        # Only the Debian family gets the upstream openvpn3 repository.
        if family == "debian" and cfg.get("repo_url"):
            self._configure_apt_repo(ctx, cfg)

        packages = ctx.manifest.family_packages("openvpn", family)
        pm_install(ctx.profile, packages, non_interactive=ctx.non_interactive, dry_run=ctx.dry_run)
        logger.info("OpenVPN installed (family=%s packages=%s)", family, ",".join(packages))
