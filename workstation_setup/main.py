from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from .config import SetupConfig, load_setup_config
from .context import SetupContext, make_context
from .errors import PipelineAborted
from .lib.assets import ensure_dir
from .logging_utils import DEFAULT_LOG_PATH, configure_logging, success
from .pipeline import PipelineResult, Step, run_pipeline, select_steps
from .state_store import build_summary, save_summary
from .steps import (
    ChangeSettingsStep,
    CleanupStep,
    ConfigureBashStep,
    ConfigureMpvStep,
    ConfigureTwitchStep,
    FirefoxProfilesStep,
    InstallBinariesStep,
    InstallProgramsStep,
    InstallYtDlpStep,
    RefreshSnapsStep,
    SetupVirtualenvStep,
    TerminalThemeStep,
    UpdateRepositoryStep,
)

logger = logging.getLogger(__name__)

PROG = "workstation-setup"
MODES = ("full", "test")
USAGE = f"Usage: {PROG} [{'|'.join(MODES)}]"


def build_final_steps() -> List[Step]:
    return [
        ConfigureBashStep(),
        TerminalThemeStep(),
        ConfigureMpvStep(),
        InstallYtDlpStep(),
        InstallBinariesStep(),
        ConfigureTwitchStep(),
        SetupVirtualenvStep(),
    ]


def build_steps(mode: str, cfg: SetupConfig) -> List[Step]:
    if mode == "test":
        # Placeholder: nothing runs in test mode yet.
        return []

    steps: List[Step] = [
        UpdateRepositoryStep(),
        RefreshSnapsStep(),
        InstallProgramsStep(),
    ]
    if cfg.firefox_profiles:
        steps.append(FirefoxProfilesStep())
    steps.append(ChangeSettingsStep())
    steps.extend(build_final_steps())
    steps.append(CleanupStep())
    return steps


def run(
    ctx: SetupContext,
    mode: str,
    *,
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
) -> PipelineResult:
    """Run the step list for mode. Raises PipelineAborted on prerequisite failure."""

    if mode not in MODES:
        raise ValueError(f"Unknown mode {mode!r}")

    logger.info("Running install function..." if mode == "full" else "Running test functions...")

    # Scratch space for downloads; idempotent.
    ensure_dir(ctx.temp_dir, dry_run=ctx.dry_run)

    result = run_pipeline(
        ctx=ctx,
        steps=build_steps(mode, ctx.cfg),
        start_at=start_at,
        stop_after=stop_after,
    )

    if result.ok:
        if result.ran_steps:
            success(logger, "Everything setup successfully. Enjoy Linux")
    else:
        logger.warning(
            "Setup finished with %d failed step(s): %s (details in %s)",
            len(result.failed_steps),
            ", ".join(result.failed_steps),
            ctx.cfg.error_log,
        )
    return result


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog=PROG, description="Bootstrap an Ubuntu workstation.")
    p.add_argument("mode", nargs="?", default=None, help="|".join(MODES))
    p.add_argument("--config", default=None, help="YAML file merged over the bundled defaults")
    p.add_argument("--log", default=None, help=f"Error log path (default: {DEFAULT_LOG_PATH})")
    p.add_argument("--dry-run", action="store_true", help="Log commands and file operations only")
    p.add_argument("--start-at", default=None, help="Start at step_id (e.g. 40_configure_bash)")
    p.add_argument("--stop-after", default=None, help="Stop after step_id")
    p.add_argument("--summary", default=None, help="Write a run summary (json|yaml)")
    p.add_argument("-v", "--verbose", action="store_true", help="Show commands and their output")

    args = p.parse_args(argv)
    level = logging.DEBUG if args.verbose else logging.INFO

    log_path = configure_logging(log_path=args.log or DEFAULT_LOG_PATH, level=level)

    if args.mode is None or args.mode not in MODES:
        logger.error("Please provide an argument." if args.mode is None else "The argument you provided is invalid")
        logger.error("%s", USAGE)
        return 1

    try:
        cfg = load_setup_config(args.config)
        cfg.validate()
    except (OSError, ValueError) as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    if args.log is None and cfg.error_log != log_path:
        log_path = configure_logging(log_path=cfg.error_log, level=level)

    try:
        select_steps(build_steps(args.mode, cfg), start_at=args.start_at, stop_after=args.stop_after)
    except ValueError as e:
        logger.error("%s", e)
        logger.error("%s", USAGE)
        return 1

    ctx = make_context(cfg, dry_run=args.dry_run)

    result: Optional[PipelineResult] = None
    aborted_at: Optional[str] = None
    try:
        result = run(ctx, args.mode, start_at=args.start_at, stop_after=args.stop_after)
    except PipelineAborted as e:
        aborted_at = e.step_id
        result = e.result
        logger.error("Aborting: prerequisite step %s failed", e.step_id)
        return 1
    finally:
        if args.summary:
            save_summary(
                args.summary,
                build_summary(mode=args.mode, result=result, aborted_at=aborted_at, error_log=log_path),
            )

    # Non-fatal step failures are reported in the log and summary line only.
    return 0
