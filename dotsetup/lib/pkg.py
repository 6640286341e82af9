from __future__ import annotations

import logging
from typing import Dict, Sequence

from .command import run_cmd, sudo
from .distro import DistroProfile

logger = logging.getLogger(__name__)


def _pm_env(non_interactive: bool) -> Dict[str, str]:
    if non_interactive:
        return {"DEBIAN_FRONTEND": "noninteractive"}
    return {}


def _sudo_env(argv: Sequence[str], env: Dict[str, str]) -> list[str]:
    # sudo resets the environment, so variables have to travel on the command line.
    if not env:
        return sudo(argv)
    assignments = [f"{k}={v}" for k, v in env.items()]
    return sudo(["env", *assignments, *argv])


def pm_run(
    profile: DistroProfile,
    template: Sequence[str],
    args: Sequence[str] = (),
    *,
    check: bool = True,
    non_interactive: bool = False,
    dry_run: bool = False,
) -> bool:
    """Run a package-manager template with sudo. Empty templates are skipped."""

    if not template:
        logger.info("No %s equivalent for this action; skipping", profile.manager)
        return False
    argv = _sudo_env([*template, *args], _pm_env(non_interactive))
    return run_cmd(argv, check=check, dry_run=dry_run).ok


def pm_update(profile: DistroProfile, *, non_interactive: bool = False, dry_run: bool = False) -> None:
    pm_run(profile, profile.update, non_interactive=non_interactive, dry_run=dry_run)


def pm_install(
    profile: DistroProfile,
    packages: Sequence[str],
    *,
    non_interactive: bool = False,
    dry_run: bool = False,
) -> None:
    if not packages:
        return
    pm_run(profile, profile.install, packages, non_interactive=non_interactive, dry_run=dry_run)


def pm_purge(
    profile: DistroProfile,
    packages: Sequence[str],
    *,
    non_interactive: bool = False,
    dry_run: bool = False,
) -> None:
    """Remove packages one by one. Absent packages are not an error."""

    for pkg in packages:
        removed = pm_run(
            profile,
            profile.remove,
            [pkg],
            check=False,
            non_interactive=non_interactive,
            dry_run=dry_run,
        )
        if not removed:
            logger.warning("Could not remove %s (probably not installed)", pkg)
