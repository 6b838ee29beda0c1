from __future__ import annotations

import logging

from ..context import SetupContext
from ..errors import StepError
from ..lib.assets import copy_file
from ..logging_utils import success

logger = logging.getLogger(__name__)


class ConfigureBashStep:
    step_id = "40_configure_bash"
    title = "Configuring bash..."
    prerequisite = False

    def run(self, ctx: SetupContext) -> None:
        src_dir = ctx.source_dir / "bash"
        if not src_dir.is_dir():
            raise StepError(f"Bash dotfile directory not found: {src_dir}")

        bashrc = ctx.home / ".bashrc"
        if bashrc.is_file():
            try:
                copy_file(bashrc, ctx.home / ".bashrc.backup", dry_run=ctx.dry_run)
            except OSError as e:
                raise StepError("Failed to backup existing .bashrc") from e
            success(logger, "Existing .bashrc backed up as .bashrc.backup")

        # bash/bashrc -> ~/.bashrc, bash/bash_aliases -> ~/.bash_aliases, ...
        copied: list[str] = []
        for src in sorted(p for p in src_dir.iterdir() if p.is_file()):
            dest = ctx.home / f".{src.name}"
            try:
                copy_file(src, dest, dry_run=ctx.dry_run)
            except OSError as e:
                raise StepError(f"Failed to copy {src.name}") from e
            copied.append(str(dest))

        success(logger, "Bash setup successful. Copied and hid files: %s", " ".join(copied))
