from __future__ import annotations

import logging

from ..context import SetupContext
from ..errors import CommandError, StepError
from ..lib.pkg import snap_refresh
from ..logging_utils import success

logger = logging.getLogger(__name__)


class RefreshSnapsStep:
    step_id = "15_refresh_snaps"
    title = "Updating Snap packages..."
    prerequisite = False

    def run(self, ctx: SetupContext) -> None:
        try:
            snap_refresh(ctx)
        except CommandError as e:
            raise StepError("Failed to update Snap packages") from e
        success(logger, "Snap packages updated successfully")
