from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Protocol, Sequence

from .console import header
from .context import SetupContext
from .errors import UnknownStepError
from .steps import (
    CleanupStep,
    CloneGitReposStep,
    CopyDotfilesStep,
    InstallCoreToolsStep,
    InstallNeovimStep,
    InstallNerdFontsStep,
    InstallNvChadStep,
    InstallSnapPackagesStep,
    PurgeOldEditorsStep,
    SetupOpenVPNStep,
    SetupRustStep,
    SetupZshStep,
    UpdateSystemStep,
)

logger = logging.getLogger(__name__)


class Step(Protocol):
    """A single idempotent step."""

    step_id: str
    title: str

    def run(self, ctx: SetupContext) -> None:
        ...


# Order of a full installation; `all` runs exactly this sequence.
# dotfiles must precede rust and zsh, which both write ~/.zshrc.
ALL_ORDER: tuple[str, ...] = (
    "update",
    "core",
    "dotfiles",
    "rust",
    "openvpn",
    "snap",
    "neovim",
    "git-repos",
    "zsh",
    "fonts",
    "cleanup",
)

STEP_NAMES: tuple[str, ...] = (*ALL_ORDER, "all")


def build_registry() -> Dict[str, List[Step]]:
    """Dispatch table shared by the CLI flags and the interactive menu."""

    registry: Dict[str, List[Step]] = {
        "update": [UpdateSystemStep()],
        "core": [InstallCoreToolsStep()],
        "rust": [SetupRustStep()],
        "openvpn": [SetupOpenVPNStep()],
        "snap": [InstallSnapPackagesStep()],
        "neovim": [PurgeOldEditorsStep(), InstallNeovimStep(), InstallNvChadStep()],
        "git-repos": [CloneGitReposStep()],
        "zsh": [SetupZshStep()],
        "dotfiles": [CopyDotfilesStep()],
        "fonts": [InstallNerdFontsStep()],
        "cleanup": [CleanupStep()],
    }
    registry["all"] = [step for name in ALL_ORDER for step in registry[name]]
    return registry


def expand(names: Iterable[str]) -> List[str]:
    """Normalize requested step names into canonical order without duplicates."""

    requested = [n.strip().lower() for n in names if n and n.strip()]
    unknown = [n for n in requested if n not in STEP_NAMES]
    if unknown:
        raise UnknownStepError(f"Unknown step(s): {', '.join(unknown)}")
    if "all" in requested:
        return ["all"]
    return [n for n in ALL_ORDER if n in requested]


@dataclass(frozen=True)
class PipelineResult:
    ran_steps: List[str]


def run_steps(
    ctx: SetupContext,
    names: Sequence[str],
    *,
    registry: Dict[str, List[Step]] | None = None,
) -> PipelineResult:
    """Run the named steps in order. The first failure propagates (fail-fast)."""

    registry = registry or build_registry()
    ran: List[str] = []

    for name in expand(names):
        for step in registry[name]:
            header(step.title)
            logger.info("Running step %s", step.step_id)
            step.run(ctx)
            ran.append(step.step_id)

    logger.info("Completed steps: %s", ", ".join(ran) or "none")
    return PipelineResult(ran_steps=ran)
