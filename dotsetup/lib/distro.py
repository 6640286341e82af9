from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ..errors import ManifestError, UnsupportedDistributionError
from .command import has_command, run_cmd
from .manifests import load_distros_manifest

logger = logging.getLogger(__name__)

OS_RELEASE_PATH = "/etc/os-release"


@dataclass(frozen=True)
class DistroProfile:
    """Package-manager command set for the detected OS family.

    Command templates are argv tuples without the sudo prefix. An empty
    template means the manager has no equivalent and the action is skipped.
    """

    family: str
    distro_id: str
    manager: str
    install: Tuple[str, ...]
    update: Tuple[str, ...]
    upgrade: Tuple[str, ...]
    autoremove: Tuple[str, ...] = ()
    autoclean: Tuple[str, ...] = ()
    remove: Tuple[str, ...] = ()
    codename: Optional[str] = None


def parse_os_release(text: str) -> Dict[str, str]:
    data: Dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, val = line.split("=", 1)
        data[key.strip().lower()] = val.strip().strip('"').strip("'")
    return data


def _lsb_release() -> Dict[str, str]:
    if not has_command("lsb_release"):
        return {}
    data: Dict[str, str] = {}
    r = run_cmd(["lsb_release", "-si"], check=False)
    if r.ok and r.stdout.strip():
        data["id"] = r.stdout.strip().lower()
    r = run_cmd(["lsb_release", "-sc"], check=False)
    if r.ok and r.stdout.strip() and r.stdout.strip().lower() != "n/a":
        data["version_codename"] = r.stdout.strip().lower()
    return data


def read_os_release(path: str = OS_RELEASE_PATH) -> Dict[str, str]:
    """Read OS identification, falling back to lsb_release when the file is absent."""

    p = Path(path)
    if p.exists():
        return parse_os_release(p.read_text(encoding="utf-8", errors="ignore"))
    logger.info("%s not found; falling back to lsb_release", path)
    return _lsb_release()


def _candidate_ids(os_release: Dict[str, str]) -> List[str]:
    ids: List[str] = []
    ident = os_release.get("id", "").strip().lower()
    if ident:
        ids.append(ident)
    for part in os_release.get("id_like", "").split():
        part = part.strip().lower()
        if part and part not in ids:
            ids.append(part)
    return ids


def _profile_from_family(family: str, family_cfg: Dict[str, Any], distro_id: str, codename: Optional[str]) -> DistroProfile:
    commands = family_cfg.get("commands") or {}
    if not isinstance(commands, dict):
        raise ManifestError(f"distros.yaml: {family}.commands must be a mapping")

    def template(name: str, required: bool = False) -> Tuple[str, ...]:
        argv = commands.get(name) or []
        if required and not argv:
            raise ManifestError(f"distros.yaml: {family}.commands.{name} is required")
        return tuple(str(a) for a in argv)

    return DistroProfile(
        family=family,
        distro_id=distro_id,
        manager=str(family_cfg.get("manager") or template("install", required=True)[0]),
        install=template("install", required=True),
        update=template("update", required=True),
        upgrade=template("upgrade", required=True),
        autoremove=template("autoremove"),
        autoclean=template("autoclean"),
        remove=template("remove"),
        codename=codename,
    )


def resolve_profile(os_release: Dict[str, str], distros: Optional[Dict[str, Any]] = None) -> DistroProfile:
    """Map os-release data to one of the known package-manager profiles.

    ID wins over ID_LIKE, and ID_LIKE tokens are tried in order.
    """

    families = (distros or load_distros_manifest()).get("families") or {}
    candidates = _candidate_ids(os_release)
    # Ubuntu derivatives carry their own VERSION_CODENAME; upstream repos key on Ubuntu's.
    codename = os_release.get("ubuntu_codename") or os_release.get("version_codename") or None

    for ident in candidates:
        for family, family_cfg in families.items():
            ids = [str(i).lower() for i in (family_cfg.get("ids") or [])]
            if ident == family or ident in ids:
                profile = _profile_from_family(family, family_cfg, candidates[0], codename)
                logger.info(
                    "Detected distribution %s (family=%s manager=%s)",
                    profile.distro_id,
                    profile.family,
                    profile.manager,
                )
                return profile

    shown = candidates[0] if candidates else "unknown"
    raise UnsupportedDistributionError(
        f"Unsupported distribution: {shown}. Supported families: {', '.join(sorted(families))}"
    )


def detect_profile(path: str = OS_RELEASE_PATH, distros: Optional[Dict[str, Any]] = None) -> DistroProfile:
    return resolve_profile(read_os_release(path), distros)
