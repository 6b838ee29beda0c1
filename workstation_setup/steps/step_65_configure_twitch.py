from __future__ import annotations

import logging

from ..context import SetupContext
from ..errors import StepError
from ..lib.assets import copy_file, ensure_dir
from ..logging_utils import success

logger = logging.getLogger(__name__)


class ConfigureTwitchStep:
    step_id = "65_configure_twitch"
    title = "Configuring Twitch..."
    prerequisite = False

    def run(self, ctx: SetupContext) -> None:
        twitch_dir = ctx.config_dir / "twitchtv"
        try:
            ensure_dir(twitch_dir, dry_run=ctx.dry_run)
        except OSError as e:
            raise StepError(f"Failed to create {twitch_dir}") from e

        src_dir = ctx.source_dir / "bin"
        configs = sorted(src_dir.glob("*.toml")) if src_dir.is_dir() else []
        if not configs:
            raise StepError(f"Failed to copy files to {twitch_dir}: no .toml config in {src_dir}")

        for src in configs:
            try:
                copy_file(src, twitch_dir / src.name, dry_run=ctx.dry_run)
            except OSError as e:
                raise StepError(f"Failed to copy files to {twitch_dir}") from e

        success(logger, "Twitch config file setup successfully.")
