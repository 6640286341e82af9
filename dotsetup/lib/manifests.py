from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..errors import ManifestError

logger = logging.getLogger(__name__)


def _manifest_dir() -> Path:
    # dotsetup/lib/manifests.py -> dotsetup/manifests
    return Path(__file__).resolve().parents[1] / "manifests"


def load_yaml(path: Path) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ManifestError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ManifestError(f"Manifest must be a mapping/dict: {path}")
    return data


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge override into a copy of base. Mappings merge, everything else replaces."""

    out = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = deep_merge(out[key], value)
        else:
            out[key] = value
    return out


@dataclass(frozen=True)
class Manifest:
    raw: Dict[str, Any]

    def section(self, key: str) -> Dict[str, Any]:
        value = self.raw.get(key) or {}
        if not isinstance(value, dict):
            raise ManifestError(f"packages manifest: {key} must be a mapping")
        return value

    def entries(self, key: str) -> List[Dict[str, Any]]:
        value = self.raw.get(key) or []
        if not isinstance(value, list):
            raise ManifestError(f"packages manifest: {key} must be a list")
        return [v for v in value if isinstance(v, dict)]

    def family_packages(self, key: str, family: str) -> List[str]:
        pkgs = self.section(key).get(family) or []
        if isinstance(pkgs, dict):
            pkgs = pkgs.get("packages") or []
        if not isinstance(pkgs, list):
            raise ManifestError(f"packages manifest: {key}.{family} must be a list")
        return [str(p).strip() for p in pkgs if str(p).strip()]

    @property
    def purge_editors(self) -> List[str]:
        return [str(p) for p in (self.raw.get("purge_editors") or [])]

    @property
    def crates(self) -> List[str]:
        return [str(c) for c in (self.section("rust").get("crates") or [])]


def load_distros_manifest() -> Dict[str, Any]:
    data = load_yaml(_manifest_dir() / "distros.yaml")
    families = data.get("families")
    if not isinstance(families, dict) or not families:
        raise ManifestError("distros.yaml: families must be a non-empty mapping")
    return data


def load_packages_manifest(config_path: Optional[str] = None) -> Manifest:
    """Load the packaged workstation manifest, merged with an optional user config."""

    raw = load_yaml(_manifest_dir() / "packages.yaml")
    if config_path:
        p = Path(config_path).expanduser()
        if not p.exists():
            raise ManifestError(f"Config file not found: {p}")
        logger.info("Merging user config %s", p)
        raw = deep_merge(raw, load_yaml(p))
    return Manifest(raw=raw)
