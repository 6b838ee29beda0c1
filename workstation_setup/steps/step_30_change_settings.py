from __future__ import annotations

import logging

from ..context import SetupContext
from ..errors import StepError
from ..logging_utils import success

logger = logging.getLogger(__name__)


class ChangeSettingsStep:
    step_id = "30_change_settings"
    title = "Changing Ubuntu settings..."
    prerequisite = False

    def run(self, ctx: SetupContext) -> None:
        settings = ctx.cfg.settings
        failed: list[str] = []

        # Every setting is attempted; the step only passes if none failed.
        for setting in settings:
            logger.info("Running: %s", setting.description)
            r = ctx.run(setting.argv, check=False, root=setting.root)
            if not r.ok:
                logger.error(
                    "Failed to %s - Error: %s",
                    setting.description,
                    (r.stderr or "").strip() or f"exit status {r.returncode}",
                )
                failed.append(setting.description)

        if failed:
            raise StepError(f"{len(failed)} of {len(settings)} settings failed: {', '.join(failed)}")
        success(logger, "Ubuntu settings changed successfully")
