from __future__ import annotations

import logging

from ..context import SetupContext
from ..errors import CommandError, StepError
from ..logging_utils import success

logger = logging.getLogger(__name__)


class SetupVirtualenvStep:
    step_id = "70_setup_virtualenv"
    title = "Installing Python virtual environment..."
    prerequisite = False

    def run(self, ctx: SetupContext) -> None:
        venv = ctx.virtualenv_dir
        try:
            ctx.run(["virtualenv", str(venv)])
        except CommandError as e:
            raise StepError("Failed to create virtual environment") from e

        # "Activating" means resolving the environment's own pip; calling it
        # directly keeps the parent environment untouched, so there is
        # nothing to deactivate afterwards.
        activate = venv / "bin" / "activate"
        pip = venv / "bin" / "pip"
        if not ctx.dry_run and not (activate.is_file() and pip.exists()):
            raise StepError("Failed to activate virtualenv")

        packages = ctx.cfg.virtualenv_packages
        if not packages:
            success(logger, "Virtual environment created at %s.", venv)
            return

        logger.info("Installing %s...", ", ".join(packages))
        try:
            ctx.run(
                [str(pip), "install", "-U", *packages],
                env={"VIRTUAL_ENV": str(venv)},
            )
        except CommandError as e:
            raise StepError(f"Failed to install {', '.join(packages)}") from e

        success(logger, "%s installed successfully.", ", ".join(packages))
