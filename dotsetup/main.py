from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from . import console as ui
from .context import SetupContext
from .errors import MissingPrerequisiteError, SetupError
from .lib.command import has_command, is_root
from .lib.distro import OS_RELEASE_PATH, DistroProfile, detect_profile
from .lib.env import load_settings
from .lib.manifests import load_packages_manifest
from .logging_utils import configure_logging
from .menu import run_menu
from .pipeline import run_steps

logger = logging.getLogger(__name__)

# (long flag, short flag, step name)
STEP_FLAGS: tuple[tuple[str, Optional[str], str], ...] = (
    ("--all", "-a", "all"),
    ("--update", "-u", "update"),
    ("--core", "-c", "core"),
    ("--zsh", "-z", "zsh"),
    ("--neovim", "-n", "neovim"),
    ("--fonts", "-f", "fonts"),
    ("--dotfiles", "-d", "dotfiles"),
    ("--rust", "-r", "rust"),
    ("--openvpn", "-o", "openvpn"),
    ("--snap", "-s", "snap"),
    ("--git-repos", "-g", "git-repos"),
    ("--cleanup", None, "cleanup"),
)


class _ArgumentParser(argparse.ArgumentParser):
    # Usage errors exit 1 like every other detected error.
    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    p = _ArgumentParser(
        prog="dotsetup",
        description="Provision a Linux workstation: packages, shell, editor, fonts and dotfiles.",
    )
    steps = p.add_argument_group("steps")
    for long_flag, short_flag, step in STEP_FLAGS:
        flags = [long_flag] + ([short_flag] if short_flag else [])
        steps.add_argument(
            *flags,
            dest="steps",
            action="append_const",
            const=step,
            help=f"Run the {step} step",
        )

    p.add_argument("--non-interactive", action="store_true", help="Never prompt; requires step flags")
    p.add_argument("--config", default=None, help="YAML file merged over the packaged manifest")
    p.add_argument("--dotfiles-dir", default=None, help="Directory holding the dotfiles (default: cwd)")
    p.add_argument("--log", default=None, help="Path to the log file")
    p.add_argument("--os-release", default=OS_RELEASE_PATH, help=argparse.SUPPRESS)
    p.add_argument("--dry-run", action="store_true", help="Log commands without executing them")
    p.add_argument("--verbose", action="store_true", help="Show debug output (including command output) on the console")
    return p


def check_prerequisites(profile: DistroProfile, *, dry_run: bool = False) -> None:
    if dry_run:
        return
    if not is_root() and not has_command("sudo"):
        raise MissingPrerequisiteError("sudo", "run as root or install sudo")
    if not has_command(profile.manager):
        raise MissingPrerequisiteError(profile.manager, f"expected for {profile.distro_id}")


def run(
    steps: Sequence[str],
    *,
    non_interactive: bool = False,
    config_path: Optional[str] = None,
    dotfiles_dir: Optional[str] = None,
    log_path: Optional[str] = None,
    os_release_path: str = OS_RELEASE_PATH,
    dry_run: bool = False,
    verbose: bool = False,
) -> int:
    """Detect the environment, then dispatch steps or start the menu."""

    settings = load_settings(dotfiles_dir=dotfiles_dir, log_path=log_path, config_path=config_path)
    actual_log = configure_logging(log_path=str(settings.log_path), verbose=verbose)

    profile = detect_profile(os_release_path)
    check_prerequisites(profile, dry_run=dry_run)
    manifest = load_packages_manifest(str(settings.config_path) if settings.config_path else None)

    ctx = SetupContext(
        profile=profile,
        settings=settings,
        manifest=manifest,
        dry_run=dry_run,
        non_interactive=non_interactive,
    )
    logger.info(
        "Starting (family=%s dry_run=%s non_interactive=%s log=%s)",
        profile.family,
        dry_run,
        non_interactive,
        actual_log,
    )

    if steps:
        result = run_steps(ctx, steps)
        ui.success(f"Done: {', '.join(result.ran_steps)}")
        return 0
    return run_menu(ctx)


def main(argv: Optional[List[str]] = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)
    steps = args.steps or []

    if not steps and args.non_interactive:
        p.error("--non-interactive requires at least one step flag")

    try:
        return run(
            steps,
            non_interactive=bool(args.non_interactive),
            config_path=args.config,
            dotfiles_dir=args.dotfiles_dir,
            log_path=args.log,
            os_release_path=args.os_release,
            dry_run=bool(args.dry_run),
            verbose=bool(args.verbose),
        )
    except SetupError as e:
        logger.error("%s", e)
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 1
    except Exception:
        logger.exception("Setup failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
