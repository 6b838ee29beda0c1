from __future__ import annotations

import logging

from ..context import SetupContext
from ..errors import CommandError, StepError
from ..lib.pkg import apt_update
from ..logging_utils import success

logger = logging.getLogger(__name__)


class UpdateRepositoryStep:
    step_id = "10_update_repository"
    title = "Updating package repositories..."
    # Nothing downstream can install without fresh package lists.
    prerequisite = True

    def run(self, ctx: SetupContext) -> None:
        try:
            apt_update(ctx)
        except CommandError as e:
            raise StepError("Repository update failed.") from e
        success(logger, "Repository update successful.")
