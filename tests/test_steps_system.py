from __future__ import annotations

import logging
from pathlib import Path

import pytest

from workstation_setup.errors import StepError
from workstation_setup.steps import (
    ChangeSettingsStep,
    CleanupStep,
    InstallProgramsStep,
    RefreshSnapsStep,
    UpdateRepositoryStep,
)


class TestUpdateRepository:
    def test_runs_apt_update_as_root(self, make_ctx, runner) -> None:
        UpdateRepositoryStep().run(make_ctx())
        assert runner.calls == [["sudo", "apt", "update"]]

    def test_without_sudo(self, make_ctx, runner) -> None:
        UpdateRepositoryStep().run(make_ctx({"use_sudo": False}))
        assert runner.calls == [["apt", "update"]]

    def test_failure(self, make_ctx, runner) -> None:
        runner.fail("sudo", "apt", "update")
        with pytest.raises(StepError, match="Repository update failed"):
            UpdateRepositoryStep().run(make_ctx())

    def test_is_prerequisite(self) -> None:
        assert UpdateRepositoryStep.prerequisite is True
        assert RefreshSnapsStep.prerequisite is False


class TestRefreshSnaps:
    def test_failure(self, make_ctx, runner) -> None:
        runner.fail("sudo", "snap", "refresh")
        with pytest.raises(StepError, match="Snap"):
            RefreshSnapsStep().run(make_ctx())


class TestInstallPrograms:
    def _write_list(self, ctx, *names: str) -> None:
        ctx.cfg.program_list.write_text("\n".join(names) + "\n", encoding="utf-8")

    def test_installs_each_in_order(self, make_ctx, runner) -> None:
        ctx = make_ctx()
        self._write_list(ctx, "vim", "", "  mpv  ", "git")
        InstallProgramsStep().run(ctx)
        assert runner.calls == [
            ["sudo", "apt", "install", "-y", "vim"],
            ["sudo", "apt", "install", "-y", "mpv"],
            ["sudo", "apt", "install", "-y", "git"],
        ]

    def test_stops_at_first_failure(self, make_ctx, runner) -> None:
        ctx = make_ctx()
        self._write_list(ctx, "vim", "broken-pkg", "git")
        runner.fail("sudo", "apt", "install", "-y", "broken-pkg")

        with pytest.raises(StepError) as ei:
            InstallProgramsStep().run(ctx)

        assert "broken-pkg" in str(ei.value)
        assert not runner.ran("sudo", "apt", "install", "-y", "git")

    def test_missing_list(self, make_ctx, runner) -> None:
        with pytest.raises(StepError, match="Program list file not found"):
            InstallProgramsStep().run(make_ctx())
        assert runner.calls == []

    def test_undecodable_list(self, make_ctx, runner) -> None:
        ctx = make_ctx()
        ctx.cfg.program_list.write_bytes(b"vim\n\xff\xfepkg\n")
        with pytest.raises(StepError, match="not valid UTF-8"):
            InstallProgramsStep().run(ctx)
        assert runner.calls == []


class TestChangeSettings:
    SETTINGS = {
        "settings": [
            {"description": "First", "argv": ["gsettings", "set", "a", "k", "1"]},
            {"description": "Second", "argv": ["gsettings", "set", "b", "k", "2"]},
            {"description": "Clock", "argv": ["timedatectl", "set-local-rtc", "1"], "root": True},
        ]
    }

    def test_all_succeed_in_order(self, make_ctx, runner) -> None:
        ChangeSettingsStep().run(make_ctx(self.SETTINGS))
        assert runner.calls == [
            ["gsettings", "set", "a", "k", "1"],
            ["gsettings", "set", "b", "k", "2"],
            ["sudo", "timedatectl", "set-local-rtc", "1"],
        ]

    def test_one_failure_fails_step_but_runs_the_rest(self, make_ctx, runner, caplog) -> None:
        runner.fail("gsettings", "set", "a", stderr="No such schema")
        with pytest.raises(StepError, match="1 of 3"):
            ChangeSettingsStep().run(make_ctx(self.SETTINGS))

        assert len(runner.calls) == 3
        errors = [r.getMessage() for r in caplog.records if r.levelno == logging.ERROR]
        assert errors == ["Failed to First - Error: No such schema"]

    def test_default_settings_are_argv_lists(self, make_ctx, runner) -> None:
        ChangeSettingsStep().run(make_ctx())
        assert ["gsettings", "set", "org.gnome.desktop.wm.keybindings", "close", "['<Super>w']"] in runner.calls
        assert ["sudo", "timedatectl", "set-timezone", "Asia/Kolkata"] in runner.calls


class TestCleanup:
    def test_removes_temp_dir(self, make_ctx) -> None:
        ctx = make_ctx()
        (ctx.temp_dir / "Hack").mkdir(parents=True)
        CleanupStep().run(ctx)
        assert not ctx.temp_dir.exists()

    def test_missing_temp_dir_is_a_failure(self, make_ctx) -> None:
        with pytest.raises(StepError, match="No temporary directory"):
            CleanupStep().run(make_ctx())

    def test_dry_run_keeps_dir(self, make_ctx) -> None:
        ctx = make_ctx(dry_run=True)
        ctx.temp_dir.mkdir(parents=True)
        CleanupStep().run(ctx)
        assert ctx.temp_dir.is_dir()

    def test_dry_run_without_dir(self, make_ctx, caplog) -> None:
        ctx = make_ctx(dry_run=True)
        with caplog.at_level("INFO"):
            CleanupStep().run(ctx)
        assert "Would remove" in caplog.text
        assert not ctx.temp_dir.exists()
