from __future__ import annotations

import json
import logging
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .pipeline import PipelineResult

logger = logging.getLogger(__name__)


def _detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    if ext in {"yaml", "yml"}:
        return "yaml"
    # Default to JSON for unknown extensions.
    return "json"


def build_summary(
    *,
    mode: str,
    result: Optional[PipelineResult],
    aborted_at: Optional[str] = None,
    error_log: Optional[str] = None,
) -> Dict[str, Any]:
    outcomes = [asdict(o) for o in result.outcomes] if result is not None else []
    return {
        "mode": mode,
        "finished_at": datetime.now().isoformat(timespec="seconds"),
        "aborted_at": aborted_at,
        "error_log": error_log,
        "outcomes": outcomes,
        "failed_steps": [o["step_id"] for o in outcomes if not o["ok"]],
    }


def load_summary(path: str) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        return {}

    text = p.read_text(encoding="utf-8")
    data = yaml.safe_load(text) if _detect_format(p) == "yaml" else json.loads(text)
    data = data or {}
    if not isinstance(data, dict):
        raise ValueError(f"Summary file must be an object/dict, got {type(data)}")
    return data


def save_summary(path: str, summary: Dict[str, Any]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    if _detect_format(p) == "yaml":
        p.write_text(yaml.safe_dump(summary, sort_keys=False), encoding="utf-8")
    else:
        p.write_text(json.dumps(summary, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    logger.debug("Run summary written to %s", p)
