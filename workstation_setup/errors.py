from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .lib.command import CmdResult


class SetupError(RuntimeError):
    """Base class for failures a step may report."""


class StepError(SetupError):
    pass


class CommandError(SetupError):
    def __init__(self, message: str, result: "CmdResult") -> None:
        super().__init__(message)
        self.result = result


class DownloadError(SetupError):
    pass


class PipelineAborted(SetupError):
    """A prerequisite step failed; nothing downstream can succeed."""

    def __init__(self, step_id: str, message: str, result: Any = None) -> None:
        super().__init__(f"{step_id}: {message}")
        self.step_id = step_id
        # Outcomes recorded up to and including the failed step.
        self.result = result
