from __future__ import annotations

import logging

from ..context import SetupContext
from ..errors import CommandError, StepError
from ..lib.pkg import apt_install, read_program_list
from ..logging_utils import success

logger = logging.getLogger(__name__)


class InstallProgramsStep:
    step_id = "20_install_programs"
    title = "Installing programs via APT..."
    prerequisite = False

    def run(self, ctx: SetupContext) -> None:
        path = ctx.cfg.program_list
        if not path.is_file():
            raise StepError(f"Program list file not found ({path}). No programs installed")

        programs = read_program_list(path)
        logger.debug("Program list %s: %d entries", path, len(programs))

        # Fail fast: the first broken package stops the rest of this list.
        for program in programs:
            logger.info("Installing %s...", program)
            try:
                apt_install(ctx, program)
            except CommandError as e:
                raise StepError(f"Failed to install {program}") from e
            success(logger, "%s installed", program)

        success(logger, "Programs installation completed")
