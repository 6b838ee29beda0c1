from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Sequence

from .config import SetupConfig
from .lib.command import CmdResult, Runner, run_cmd

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SetupContext:
    """Everything a step needs, fixed for the whole run."""

    cfg: SetupConfig
    home: Path
    source_dir: Path
    dry_run: bool = False
    runner: Runner = run_cmd

    def run(
        self,
        argv: Sequence[str],
        *,
        check: bool = True,
        root: bool = False,
        env: Mapping[str, str] | None = None,
        cwd: str | None = None,
    ) -> CmdResult:
        argv_list = [str(a) for a in argv]
        if root and self.cfg.use_sudo:
            argv_list = ["sudo", *argv_list]
        return self.runner(argv_list, check=check, env=env, cwd=cwd, dry_run=self.dry_run)

    @property
    def temp_dir(self) -> Path:
        return self.cfg.temp_dir

    @property
    def local_bin(self) -> Path:
        return self.home / ".local" / "bin"

    @property
    def config_dir(self) -> Path:
        return self.home / ".config"

    @property
    def yt_dlp_path(self) -> Path:
        return self.local_bin / "yt-dlp"

    @property
    def applications_dir(self) -> Path:
        return self.home / ".local" / "share" / "applications"

    @property
    def virtualenv_dir(self) -> Path:
        p = Path(self.cfg.virtualenv_path).expanduser()
        return p if p.is_absolute() else self.home / p


def detect_source_dir(runner: Runner = run_cmd) -> Path:
    """Git toplevel of the current directory, falling back to cwd."""

    r = runner(["git", "rev-parse", "--show-toplevel"], check=False)
    top = (r.stdout or "").strip()
    if r.ok and top:
        return Path(top)
    logger.debug("Not inside a git checkout; using %s as source dir", Path.cwd())
    return Path.cwd()


def make_context(
    cfg: SetupConfig,
    *,
    dry_run: bool = False,
    runner: Runner = run_cmd,
    home: Optional[Path] = None,
) -> SetupContext:
    if home is None:
        home = Path(cfg.home).expanduser() if cfg.home else Path(os.path.expanduser("~"))
    source_dir = Path(cfg.source_dir).expanduser() if cfg.source_dir else detect_source_dir(runner)
    return SetupContext(cfg=cfg, home=home, source_dir=source_dir, dry_run=dry_run, runner=runner)
