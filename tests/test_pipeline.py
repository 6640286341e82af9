"""
Tests for the step dispatcher: name expansion, the `all` composition and fail-fast.
"""

import os

import pytest

from dotsetup import pipeline
from dotsetup.errors import CommandError, UnknownStepError
from dotsetup.pipeline import ALL_ORDER, build_registry, expand, run_steps


class _Recorder:
    def __init__(self, step_id, log, fail=False):
        self.step_id = step_id
        self.title = step_id
        self._log = log
        self._fail = fail

    def run(self, ctx):
        self._log.append(self.step_id)
        if self._fail:
            raise CommandError(["false"], 1)


@pytest.fixture(autouse=True)
def _quiet_headers(monkeypatch):
    monkeypatch.setattr(pipeline, "header", lambda title: None)


class TestExpand:
    def test_canonical_order_and_dedup(self):
        assert expand(["fonts", "update", "fonts", "zsh"]) == ["update", "zsh", "fonts"]

    def test_all_swallows_everything_else(self):
        assert expand(["core", "all"]) == ["all"]

    def test_case_and_whitespace_insensitive(self):
        assert expand([" Neovim "]) == ["neovim"]

    def test_unknown_name(self):
        with pytest.raises(UnknownStepError, match="bogus"):
            expand(["core", "bogus"])


class TestRegistry:
    def test_every_name_registered(self):
        registry = build_registry()
        assert set(registry) == set(ALL_ORDER) | {"all"}

    def test_all_is_ordered_composition(self):
        registry = build_registry()
        expected = [s.step_id for name in ALL_ORDER for s in registry[name]]
        assert [s.step_id for s in registry["all"]] == expected

    def test_neovim_is_purge_install_configure(self):
        ids = [s.step_id for s in build_registry()["neovim"]]
        assert ids == ["purge-editors", "neovim-install", "nvchad"]

    def test_full_installation_order(self):
        assert ALL_ORDER == (
            "update", "core", "dotfiles", "rust", "openvpn", "snap",
            "neovim", "git-repos", "zsh", "fonts", "cleanup",
        )


class TestRunSteps:
    def _registry(self, log, fail_on=None):
        reg = {name: [_Recorder(name, log, fail=(name == fail_on))] for name in ALL_ORDER}
        reg["all"] = [step for name in ALL_ORDER for step in reg[name]]
        return reg

    def test_all_equals_running_each_step_in_order(self, ctx):
        via_all, via_each = [], []
        run_steps(ctx, ["all"], registry=self._registry(via_all))
        for name in ALL_ORDER:
            run_steps(ctx, [name], registry=self._registry(via_each))
        assert via_all == via_each == list(ALL_ORDER)

    def test_result_lists_ran_steps(self, ctx):
        log = []
        result = run_steps(ctx, ["zsh", "core"], registry=self._registry(log))
        assert result.ran_steps == ["core", "zsh"]

    def test_fail_fast(self, ctx):
        log = []
        with pytest.raises(CommandError):
            run_steps(ctx, ["all"], registry=self._registry(log, fail_on="snap"))
        assert log == ["update", "core", "dotfiles", "rust", "openvpn", "snap"]


class TestFullInstallation:
    def test_fresh_home_keeps_synced_zshrc(self, runner, ctx, home, dotfiles_src):
        zshrc = dotfiles_src / ".zshrc"
        zshrc.write_text("source $ZSH/oh-my-zsh.sh\n")
        os.utime(zshrc, (1_000_000, 1_000_000))
        # Fonts already present keeps the nerd-fonts build out of this run.
        fonts = home / ".local" / "share" / "fonts"
        fonts.mkdir(parents=True)
        (fonts / "MesloLGS NF Regular.ttf").write_text("")

        result = run_steps(ctx, ["all"])

        assert result.ran_steps.index("dotfiles") < result.ran_steps.index("rust")
        assert result.ran_steps.index("dotfiles") < result.ran_steps.index("zsh")
        text = (home / ".zshrc").read_text()
        assert text.startswith("source $ZSH/oh-my-zsh.sh\n")
        assert 'export PATH="$HOME/.cargo/bin:$PATH"' in text
