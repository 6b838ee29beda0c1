from __future__ import annotations

import logging
import os
import shutil
import stat
from pathlib import Path
from typing import List

from ..errors import StepError

logger = logging.getLogger(__name__)


def ensure_dir(path: Path, *, dry_run: bool = False) -> None:
    """Create a directory (and parents); a no-op when it already exists."""
    if dry_run:
        logger.debug("Would create directory %s", path)
        return
    path.mkdir(parents=True, exist_ok=True)


def copy_file(src: Path, dst: Path, *, dry_run: bool = False) -> None:
    if not src.is_file():
        raise FileNotFoundError(str(src))

    if dry_run:
        logger.debug("Would copy %s -> %s", src, dst)
        return

    dst.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(src, dst)


def copy_tree(src: Path, dst: Path, *, dry_run: bool = False) -> None:
    """Merge-copy src into dst, overwriting files that already exist."""
    if not src.is_dir():
        raise FileNotFoundError(str(src))

    if dry_run:
        logger.debug("Would copy tree %s -> %s", src, dst)
        return

    dst.mkdir(parents=True, exist_ok=True)
    for item in sorted(src.rglob("*")):
        out = dst / item.relative_to(src)
        if item.is_dir():
            out.mkdir(parents=True, exist_ok=True)
        else:
            out.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(item, out)


def replace_in_file(path: Path, old: str, new: str, *, dry_run: bool = False) -> bool:
    """Replace every occurrence of old; returns whether anything changed."""
    if dry_run:
        logger.debug("Would replace %r in %s", old, path)
        return False

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise StepError(f"{path} is not valid UTF-8") from e
    if old not in text:
        return False
    path.write_text(text.replace(old, new), encoding="utf-8")
    return True


def make_executable(directory: Path, *, dry_run: bool = False) -> List[Path]:
    """chmod +x every regular file in directory that is not executable yet."""
    changed: List[Path] = []
    if not directory.is_dir():
        return changed
    for p in sorted(directory.iterdir()):
        if not p.is_file() or os.access(p, os.X_OK):
            continue
        if not dry_run:
            mode = p.stat().st_mode
            p.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        changed.append(p)
    return changed
