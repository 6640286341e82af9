"""
Shared test fixtures: a temporary HOME, a recording command runner and a
ready-made SetupContext. No test runs real external commands.
"""

import subprocess
from pathlib import Path
from typing import Callable, List, Optional

import pytest

from dotsetup.context import SetupContext
from dotsetup.lib import command
from dotsetup.lib.distro import resolve_profile
from dotsetup.lib.env import Settings
from dotsetup.lib.manifests import load_packages_manifest


class FakeRunner:
    """Stands in for subprocess.run inside dotsetup.lib.command."""

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self.inputs: List[Optional[str]] = []
        self.envs: List[Optional[dict]] = []
        self.returncode_for: Callable[[List[str]], int] = lambda argv: 0
        self.stdout_for: Callable[[List[str]], str] = lambda argv: ""

    def __call__(self, argv, input=None, **kwargs):
        argv = list(argv)
        self.calls.append(argv)
        self.inputs.append(input)
        self.envs.append(kwargs.get("env"))
        return subprocess.CompletedProcess(
            argv, self.returncode_for(argv), stdout=self.stdout_for(argv), stderr=""
        )

    def commands(self) -> List[str]:
        return [" ".join(c) for c in self.calls]


@pytest.fixture
def runner(monkeypatch) -> FakeRunner:
    fake = FakeRunner()
    monkeypatch.setattr(command.subprocess, "run", fake)
    monkeypatch.setattr(command.shutil, "which", lambda name: f"/usr/bin/{name}")
    monkeypatch.setattr(command, "is_root", lambda: False)
    return fake


@pytest.fixture
def home(tmp_path: Path) -> Path:
    h = tmp_path / "home"
    h.mkdir()
    return h


@pytest.fixture
def dotfiles_src(tmp_path: Path) -> Path:
    d = tmp_path / "dotfiles"
    d.mkdir()
    return d


@pytest.fixture
def settings(home: Path, dotfiles_src: Path, tmp_path: Path) -> Settings:
    return Settings(home=home, dotfiles_dir=dotfiles_src, log_path=tmp_path / "dotsetup.log")


@pytest.fixture
def make_ctx(settings: Settings) -> Callable[..., SetupContext]:
    def _make(distro_id: str = "debian", *, codename: Optional[str] = "bookworm", **kwargs) -> SetupContext:
        os_release = {"id": distro_id}
        if codename:
            os_release["version_codename"] = codename
        return SetupContext(
            profile=resolve_profile(os_release),
            settings=settings,
            manifest=load_packages_manifest(),
            **kwargs,
        )

    return _make


@pytest.fixture
def ctx(make_ctx) -> SetupContext:
    return make_ctx()
