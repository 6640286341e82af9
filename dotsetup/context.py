from __future__ import annotations

from dataclasses import dataclass

from .lib.distro import DistroProfile
from .lib.env import Settings
from .lib.manifests import Manifest


@dataclass(frozen=True)
class SetupContext:
    """Everything a step needs, resolved once at startup."""

    profile: DistroProfile
    settings: Settings
    manifest: Manifest
    dry_run: bool = False
    non_interactive: bool = False
