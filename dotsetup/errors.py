from __future__ import annotations

import shlex
from typing import Sequence


class SetupError(RuntimeError):
    """Base class for every error the installer reports and exits 1 on."""


class UnsupportedDistributionError(SetupError):
    pass


class MissingPrerequisiteError(SetupError):
    def __init__(self, command: str, hint: str = "") -> None:
        msg = f"Required command not found on PATH: {command}"
        if hint:
            msg = f"{msg} ({hint})"
        super().__init__(msg)
        self.command = command


class CommandError(SetupError):
    def __init__(self, argv: Sequence[str], returncode: int, stderr: str = "") -> None:
        cmd = " ".join(shlex.quote(a) for a in argv)
        super().__init__(f"Command failed ({returncode}): {cmd}\n{stderr}".rstrip())
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr


class ManifestError(SetupError):
    pass


class UnknownStepError(SetupError):
    pass


class InvalidChoiceError(ValueError):
    """Menu input that maps to no entry. Recoverable: the menu re-prompts."""
