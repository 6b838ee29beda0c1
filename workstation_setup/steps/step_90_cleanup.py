from __future__ import annotations

import logging
import shutil

from ..context import SetupContext
from ..errors import StepError
from ..logging_utils import success

logger = logging.getLogger(__name__)


class CleanupStep:
    step_id = "90_cleanup"
    title = "Removing temporary directory..."
    prerequisite = False

    def run(self, ctx: SetupContext) -> None:
        temp_dir = ctx.temp_dir
        if ctx.dry_run:
            # Dry runs never create the directory, so there is nothing to check.
            logger.info("Would remove %s", temp_dir)
            return

        if not temp_dir.is_dir():
            raise StepError("No temporary directory present to remove")

        shutil.rmtree(temp_dir)
        success(logger, "Temporary directory removed successfully")
