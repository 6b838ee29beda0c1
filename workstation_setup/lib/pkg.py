from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from ..context import SetupContext
from ..errors import StepError

logger = logging.getLogger(__name__)


def apt_update(ctx: SetupContext) -> None:
    ctx.run(["apt", "update"], root=True)


def apt_install(ctx: SetupContext, package: str) -> None:
    ctx.run(["apt", "install", "-y", package], root=True)


def snap_refresh(ctx: SetupContext, *names: str) -> None:
    ctx.run(["snap", "refresh", *names], root=True)


def read_program_list(path: Path) -> List[str]:
    """Package names, one per line, in file order.

    Blank lines are skipped; duplicates are kept.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise StepError(f"Program list {path} is not valid UTF-8") from e

    programs: List[str] = []
    for line in text.splitlines():
        name = line.strip()
        if name:
            programs.append(name)
    return programs
