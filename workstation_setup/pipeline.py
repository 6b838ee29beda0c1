from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence

from .context import SetupContext
from .errors import PipelineAborted, SetupError

logger = logging.getLogger(__name__)


class Step(Protocol):
    """A single idempotent step.

    Succeeds by returning, fails by raising SetupError (or OSError, or
    ValueError for undecodable input files).
    """

    step_id: str
    title: str
    prerequisite: bool

    def run(self, ctx: SetupContext) -> None:
        ...


@dataclass(frozen=True)
class StepOutcome:
    step_id: str
    ok: bool
    message: Optional[str] = None


@dataclass
class PipelineResult:
    outcomes: List[StepOutcome] = field(default_factory=list)

    @property
    def ran_steps(self) -> List[str]:
        return [o.step_id for o in self.outcomes]

    @property
    def failed_steps(self) -> List[str]:
        return [o.step_id for o in self.outcomes if not o.ok]

    @property
    def ok(self) -> bool:
        return not self.failed_steps


def select_steps(
    steps: Sequence[Step],
    *,
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
) -> List[Step]:
    """Slice the step list for re-entry; unknown ids are a ValueError."""

    ids = [s.step_id for s in steps]
    for wanted in (start_at, stop_after):
        if wanted is not None and wanted not in ids:
            raise ValueError(f"Unknown step id {wanted!r} (known: {', '.join(ids)})")

    begin = ids.index(start_at) if start_at is not None else 0
    end = ids.index(stop_after) + 1 if stop_after is not None else len(ids)
    return list(steps[begin:end])


def run_pipeline(
    *,
    ctx: SetupContext,
    steps: Sequence[Step],
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
) -> PipelineResult:
    """Run steps in order, best-effort.

    A failing step is logged and recorded and the next one runs, except for
    prerequisite steps, whose failure raises PipelineAborted.
    """

    result = PipelineResult()

    for step in select_steps(steps, start_at=start_at, stop_after=stop_after):
        logger.info("%s", step.title)
        logger.debug("Running step %s", step.step_id)
        try:
            step.run(ctx)
        except (SetupError, OSError, ValueError) as e:
            message = str(e) or e.__class__.__name__
            logger.error("%s", message)
            result.outcomes.append(StepOutcome(step_id=step.step_id, ok=False, message=message))
            if step.prerequisite:
                raise PipelineAborted(step.step_id, message, result) from e
            continue
        result.outcomes.append(StepOutcome(step_id=step.step_id, ok=True))

    return result
