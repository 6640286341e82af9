"""
Tests for distribution detection: os-release parsing and profile resolution.
"""

import textwrap
from pathlib import Path

import pytest

from dotsetup.errors import UnsupportedDistributionError
from dotsetup.lib import distro
from dotsetup.lib.distro import detect_profile, parse_os_release, resolve_profile


class TestParseOsRelease:
    def test_parses_quoted_and_bare_values(self):
        data = parse_os_release(textwrap.dedent("""\
            # comment
            NAME="Ubuntu"
            ID=ubuntu
            ID_LIKE=debian
            VERSION_CODENAME=noble

            PRETTY_NAME='Ubuntu 24.04 LTS'
        """))
        assert data["id"] == "ubuntu"
        assert data["id_like"] == "debian"
        assert data["name"] == "Ubuntu"
        assert data["pretty_name"] == "Ubuntu 24.04 LTS"
        assert data["version_codename"] == "noble"

    def test_ignores_lines_without_equals(self):
        assert parse_os_release("garbage\nID=arch\n") == {"id": "arch"}


class TestResolveProfile:
    @pytest.mark.parametrize(
        "distro_id, family, manager",
        [
            ("ubuntu", "debian", "apt"),
            ("debian", "debian", "apt"),
            ("fedora", "fedora", "dnf"),
            ("rocky", "fedora", "dnf"),
            ("opensuse-tumbleweed", "suse", "zypper"),
            ("arch", "arch", "pacman"),
            ("manjaro", "arch", "pacman"),
        ],
    )
    def test_known_ids(self, distro_id, family, manager):
        profile = resolve_profile({"id": distro_id})
        assert profile.family == family
        assert profile.manager == manager
        assert profile.distro_id == distro_id

    def test_debian_commands(self):
        profile = resolve_profile({"id": "ubuntu"})
        assert profile.install == ("apt", "install", "-y")
        assert profile.update == ("apt", "update", "-y")
        assert profile.upgrade == ("apt", "full-upgrade", "-y")
        assert profile.autoremove == ("apt", "autoremove", "-y")
        assert profile.autoclean == ("apt", "autoclean", "-y")

    def test_managers_without_autoremove_get_empty_template(self):
        assert resolve_profile({"id": "arch"}).autoremove == ()
        assert resolve_profile({"id": "opensuse-leap"}).autoremove == ()

    def test_falls_back_to_id_like(self):
        profile = resolve_profile({"id": "somederivative", "id_like": "ubuntu debian"})
        assert profile.family == "debian"
        assert profile.distro_id == "somederivative"

    def test_id_wins_over_id_like(self):
        profile = resolve_profile({"id": "fedora", "id_like": "debian"})
        assert profile.family == "fedora"

    def test_codename_recorded(self):
        profile = resolve_profile({"id": "debian", "version_codename": "trixie"})
        assert profile.codename == "trixie"

    def test_ubuntu_derivative_uses_ubuntu_codename(self, tmp_path: Path):
        f = tmp_path / "os-release"
        f.write_text(textwrap.dedent("""\
            NAME="Linux Mint"
            ID=linuxmint
            ID_LIKE="ubuntu debian"
            VERSION_CODENAME=wilma
            UBUNTU_CODENAME=noble
        """))
        profile = detect_profile(str(f))
        assert profile.family == "debian"
        assert profile.distro_id == "linuxmint"
        assert profile.codename == "noble"

    def test_unsupported_is_fatal(self):
        with pytest.raises(UnsupportedDistributionError, match="gentoo"):
            resolve_profile({"id": "gentoo"})

    def test_empty_os_release_is_fatal(self):
        with pytest.raises(UnsupportedDistributionError):
            resolve_profile({})

    def test_profile_is_immutable(self):
        profile = resolve_profile({"id": "arch"})
        with pytest.raises(Exception):
            profile.family = "debian"  # type: ignore[misc]


class TestDetectProfile:
    def test_reads_os_release_file(self, tmp_path: Path):
        f = tmp_path / "os-release"
        f.write_text('ID="fedora"\nVERSION_ID=40\n')
        assert detect_profile(str(f)).family == "fedora"

    def test_falls_back_to_lsb_release(self, tmp_path: Path, runner):
        runner.stdout_for = lambda argv: "Arch\n" if argv[-1] == "-si" else "n/a\n"
        profile = detect_profile(str(tmp_path / "missing"))
        assert profile.family == "arch"
        assert profile.codename is None
        assert ["lsb_release", "-si"] in runner.calls

    def test_no_source_at_all_is_fatal(self, tmp_path: Path, monkeypatch):
        monkeypatch.setattr(distro, "has_command", lambda name: False)
        with pytest.raises(UnsupportedDistributionError):
            detect_profile(str(tmp_path / "missing"))
