from __future__ import annotations

import logging
import sys
from typing import Optional

DEFAULT_LOG_PATH = "error_log.txt"

RC = "\033[0m"
RED = "\033[1;38;2;255;51;51m"
GREEN = "\033[1;32m"
YELLOW = "\033[1;33m"

CHECK_MARK = "✔"

_HANDLER_TAG = "_workstation_setup_handler"


class ConsoleFormatter(logging.Formatter):
    """Coloured terminal output with a visual marker per level."""

    def __init__(self, *, color: bool = True) -> None:
        super().__init__(datefmt="%Y-%m-%d %H:%M:%S")
        self.color = color

    def _paint(self, code: str, text: str) -> str:
        return f"{code}{text}{RC}" if self.color else text

    def format(self, record: logging.LogRecord) -> str:
        msg = record.getMessage()
        if record.exc_info:
            msg = f"{msg}\n{self.formatException(record.exc_info)}"

        if record.levelno >= logging.ERROR:
            return self._paint(RED, f"Error: {msg}")
        if record.levelno >= logging.WARNING:
            return self._paint(YELLOW, f"Warning: {msg}")
        if getattr(record, "success", False):
            return self._paint(GREEN, f"{msg} {CHECK_MARK}")
        if record.levelno >= logging.INFO:
            return self._paint(YELLOW, f"\n[{self.formatTime(record, self.datefmt)}] INFO: {msg}")
        return msg


def success(logger: logging.Logger, msg: str, *args: object) -> None:
    logger.info(msg, *args, extra={"success": True})


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
    color: Optional[bool] = None,
) -> str:
    """Configure logging.

    Errors are appended to log_path as ``[<timestamp>] ERROR: <message>``.
    The file is opened lazily, so it only appears once something fails, and
    it is never truncated.

    Calling this again replaces the handlers installed by the previous call.

    Returns the log file path.
    """

    root = logging.getLogger()
    root.setLevel(min(level, logging.INFO))

    for h in list(root.handlers):
        if getattr(h, _HANDLER_TAG, False):
            root.removeHandler(h)
            h.close()

    handlers: list[logging.Handler] = []

    file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8", delay=True)
    file_handler.setLevel(logging.ERROR)
    file_handler.setFormatter(
        logging.Formatter(fmt="[%(asctime)s] %(levelname)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
    )
    handlers.append(file_handler)

    if also_console:
        if color is None:
            color = sys.stderr.isatty()
        console = logging.StreamHandler(sys.stderr)
        console.setLevel(level)
        console.setFormatter(ConsoleFormatter(color=color))
        handlers.append(console)

    for h in handlers:
        setattr(h, _HANDLER_TAG, True)
        root.addHandler(h)

    return log_path
