from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
from dataclasses import dataclass
from typing import Mapping, Sequence

from ..errors import CommandError, MissingPrerequisiteError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def _fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def run_cmd(
    argv: Sequence[str],
    *,
    check: bool = True,
    env: Mapping[str, str] | None = None,
    cwd: str | None = None,
    input_text: str | None = None,
    dry_run: bool = False,
) -> CmdResult:
    """Run a command with consistent logging.

    - Always logs the command.
    - Captures stdout/stderr and logs them at DEBUG.
    - dry_run logs but does not execute.
    - check=True raises CommandError on a non-zero exit (fail-fast).
    """

    argv_list = list(argv)
    logger.info("CMD %s", _fmt_argv(argv_list))

    if dry_run:
        return CmdResult(argv=argv_list, returncode=0, stdout="", stderr="")

    try:
        p = subprocess.run(
            argv_list,
            input=input_text,
            text=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            cwd=cwd,
            env=dict(os.environ, **(env or {})),
        )
    except FileNotFoundError as e:
        raise MissingPrerequisiteError(argv_list[0]) from e

    if p.stdout:
        logger.debug("STDOUT %s", p.stdout.strip())
    if p.stderr:
        logger.debug("STDERR %s", p.stderr.strip())

    if check and p.returncode != 0:
        raise CommandError(argv_list, p.returncode, p.stderr)

    return CmdResult(argv=argv_list, returncode=p.returncode, stdout=p.stdout, stderr=p.stderr)


def is_root() -> bool:
    return os.geteuid() == 0


def sudo(argv: Sequence[str]) -> list[str]:
    """Prefix argv with sudo unless we already run as root."""

    if is_root():
        return list(argv)
    return ["sudo", *argv]


def has_command(name: str) -> bool:
    return shutil.which(name) is not None


def require_command(name: str, *, hint: str = "", dry_run: bool = False) -> None:
    if dry_run:
        return
    if not has_command(name):
        raise MissingPrerequisiteError(name, hint)


def write_root_file(path: str, content: str, *, dry_run: bool = False) -> None:
    """Write a file owned by root through `sudo tee`."""

    run_cmd([*sudo(["tee", path])], input_text=content, dry_run=dry_run)
