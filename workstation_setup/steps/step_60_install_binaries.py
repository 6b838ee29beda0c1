from __future__ import annotations

import logging

from ..context import SetupContext
from ..errors import StepError
from ..lib.assets import copy_file, ensure_dir, make_executable
from ..logging_utils import success

logger = logging.getLogger(__name__)


class InstallBinariesStep:
    step_id = "60_install_binaries"
    title = "Configuring binaries..."
    prerequisite = False

    def run(self, ctx: SetupContext) -> None:
        src_dir = ctx.source_dir / "bin"
        if not src_dir.is_dir():
            raise StepError(f"Binary directory not found: {src_dir}")

        try:
            ensure_dir(ctx.local_bin, dry_run=ctx.dry_run)
        except OSError as e:
            raise StepError(f"Failed to create directory {ctx.local_bin}") from e

        # *.toml files are tool config, handled by the Twitch step.
        for src in sorted(src_dir.iterdir()):
            if not src.is_file() or src.suffix == ".toml":
                continue
            try:
                copy_file(src, ctx.local_bin / src.name, dry_run=ctx.dry_run)
            except OSError as e:
                raise StepError(f"Failed to copy {src}") from e

        for p in make_executable(ctx.local_bin, dry_run=ctx.dry_run):
            logger.debug("chmod +x %s", p)

        success(logger, "Binaries copied to .local/bin.")
