from __future__ import annotations

import logging

from ..context import SetupContext
from ..errors import StepError
from ..lib.assets import copy_tree, ensure_dir, replace_in_file
from ..logging_utils import success

logger = logging.getLogger(__name__)


class ConfigureMpvStep:
    step_id = "50_configure_mpv"
    title = "Configuring mpv..."
    prerequisite = False

    def run(self, ctx: SetupContext) -> None:
        mpv_dir = ctx.config_dir / "mpv"
        try:
            ensure_dir(mpv_dir, dry_run=ctx.dry_run)
        except OSError as e:
            raise StepError(f"Failed to create directory {mpv_dir}") from e

        try:
            copy_tree(ctx.source_dir / "mpv", mpv_dir, dry_run=ctx.dry_run)
        except OSError as e:
            raise StepError(f"Failed to copy files to {mpv_dir}") from e

        conf = mpv_dir / "mpv.conf"
        if conf.is_file():
            replace_in_file(conf, ctx.cfg.mpv_placeholder, str(ctx.yt_dlp_path), dry_run=ctx.dry_run)

        success(logger, "MPV configured successfully.")
