from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

import pytest

from workstation_setup.config import load_yaml, merge, DEFAULTS_PATH, SetupConfig
from workstation_setup.context import SetupContext
from workstation_setup.errors import CommandError
from workstation_setup.lib.command import CmdResult, fmt_argv


class FakeRunner:
    """Records argv lists; commands succeed unless told otherwise."""

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self._failures: List[Tuple[List[str], int, str]] = []
        self._hooks: List[Tuple[List[str], Callable[[List[str]], None]]] = []

    def fail(self, *prefix: str, returncode: int = 1, stderr: str = "boom") -> None:
        self._failures.append((list(prefix), returncode, stderr))

    def on(self, *prefix: str, hook: Callable[[List[str]], None]) -> None:
        self._hooks.append((list(prefix), hook))

    def ran(self, *prefix: str) -> bool:
        return any(c[: len(prefix)] == list(prefix) for c in self.calls)

    def __call__(
        self,
        argv: Sequence[str],
        *,
        check: bool = True,
        env: Optional[Mapping[str, str]] = None,
        cwd: Optional[str] = None,
        dry_run: bool = False,
    ) -> CmdResult:
        argv = list(argv)
        self.calls.append(argv)

        returncode, stderr = 0, ""
        for prefix, rc, err in self._failures:
            if argv[: len(prefix)] == prefix:
                returncode, stderr = rc, err
                break

        if returncode == 0:
            for prefix, hook in self._hooks:
                if argv[: len(prefix)] == prefix:
                    hook(argv)

        result = CmdResult(argv=argv, returncode=returncode, stdout="", stderr=stderr)
        if check and returncode != 0:
            raise CommandError(f"Command failed ({returncode}): {fmt_argv(argv)}", result)
        return result


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def make_ctx(tmp_path: Path, runner: FakeRunner) -> Callable[..., SetupContext]:
    """Build a context rooted in tmp_path; keyword overrides merge into the config."""

    def _make(overrides: Optional[Dict[str, Any]] = None, dry_run: bool = False) -> SetupContext:
        raw = merge(
            load_yaml(DEFAULTS_PATH),
            {
                "paths": {
                    "temp_dir": str(tmp_path / "tmp" / "SETUP"),
                    "program_list": str(tmp_path / "program_list.txt"),
                    "font_install_dir": str(tmp_path / "fonts"),
                },
                "logging": {"error_log": str(tmp_path / "error_log.txt")},
            },
        )
        raw = merge(raw, overrides or {})
        home = tmp_path / "home"
        home.mkdir(exist_ok=True)
        source = tmp_path / "src"
        source.mkdir(exist_ok=True)
        return SetupContext(
            cfg=SetupConfig(raw=raw),
            home=home,
            source_dir=source,
            dry_run=dry_run,
            runner=runner,
        )

    return _make


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    root = logging.getLogger()
    for h in list(root.handlers):
        if getattr(h, "_workstation_setup_handler", False):
            root.removeHandler(h)
            h.close()
