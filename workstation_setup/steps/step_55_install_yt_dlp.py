from __future__ import annotations

import logging

from ..context import SetupContext
from ..errors import SetupError, StepError
from ..lib.assets import ensure_dir
from ..lib.net import download_file
from ..logging_utils import success

logger = logging.getLogger(__name__)


class InstallYtDlpStep:
    step_id = "55_install_yt_dlp"
    title = "Installing yt-dlp..."
    prerequisite = False

    def run(self, ctx: SetupContext) -> None:
        try:
            ensure_dir(ctx.local_bin, dry_run=ctx.dry_run)
        except OSError as e:
            raise StepError(f"Failed to create directory {ctx.local_bin}") from e

        if ctx.dry_run:
            logger.debug("Would download %s -> %s", ctx.cfg.yt_dlp_url, ctx.yt_dlp_path)
        else:
            try:
                download_file(ctx.cfg.yt_dlp_url, ctx.yt_dlp_path)
            except SetupError as e:
                raise StepError("Failed to download yt-dlp binary") from e

        success(logger, "yt-dlp installed successfully.")
