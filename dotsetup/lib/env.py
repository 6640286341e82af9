from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_CONFIG_REL = ".config/dotsetup/config.yaml"


def _state_home(env: Mapping[str, str], home: Path) -> Path:
    xdg = env.get("XDG_STATE_HOME")
    return Path(xdg) if xdg else home / ".local" / "state"


@dataclass(frozen=True)
class Settings:
    home: Path
    dotfiles_dir: Path
    log_path: Path
    config_path: Optional[Path] = None
    zsh_custom: Optional[Path] = None

    @property
    def downloads_dir(self) -> Path:
        return self.home / "Downloads"

    @property
    def config_dir(self) -> Path:
        return self.home / ".config"

    @property
    def ohmyzsh_dir(self) -> Path:
        return self.home / ".oh-my-zsh"

    @property
    def zsh_custom_dir(self) -> Path:
        return self.zsh_custom or self.ohmyzsh_dir / "custom"

    @property
    def cargo_bin(self) -> Path:
        return self.home / ".cargo" / "bin"

    def under_home(self, rel: str) -> Path:
        return self.home / rel.lstrip("/")


def default_log_path(env: Optional[Mapping[str, str]] = None) -> Path:
    env = os.environ if env is None else env
    home = Path(env.get("HOME") or Path.home())
    return _state_home(env, home) / "dotsetup" / "dotsetup.log"


def load_settings(
    *,
    dotfiles_dir: Optional[str] = None,
    log_path: Optional[str] = None,
    config_path: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Build Settings from the environment and CLI overrides.

    The user config file is only picked up implicitly when it exists.
    """

    env = os.environ if env is None else env
    home = Path(env.get("HOME") or Path.home())

    cfg: Optional[Path] = Path(config_path).expanduser() if config_path else None
    if cfg is None:
        implicit = home / DEFAULT_CONFIG_REL
        if implicit.exists():
            cfg = implicit

    zsh_custom = env.get("ZSH_CUSTOM")

    return Settings(
        home=home,
        dotfiles_dir=Path(dotfiles_dir).expanduser() if dotfiles_dir else Path.cwd(),
        log_path=Path(log_path).expanduser() if log_path else default_log_path(env),
        config_path=cfg,
        zsh_custom=Path(zsh_custom).expanduser() if zsh_custom else None,
    )
