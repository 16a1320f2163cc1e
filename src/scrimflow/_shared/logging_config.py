# Area: Shared
"""
scrimflow._shared.logging_config — Bot logging
==============================================

Everything under the ``scrimflow`` logger goes to two places: a
colored console line for whoever runs the bot, and one JSON object
per line in the log file. Lobby context passed through ``extra``
(session, player, command) lands as top-level JSON keys.
"""

from __future__ import annotations
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from ..errors import ConfigurationError

logger = logging.getLogger("scrimflow")

# ``extra`` keys copied into file records
CONTEXT_FIELDS = ("session_id", "player_id", "command")

CONSOLE_FORMAT = "%(asctime)s │ %(levelname)s │ %(name)s │ %(message)s"

LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
RESET = "\033[0m"


class TerminalFormatter(logging.Formatter):
    """Console lines with the level name colored."""

    def format(self, record: logging.LogRecord) -> str:
        # Copy so the file handler still sees the plain level name
        record = logging.makeLogRecord(record.__dict__)
        color = LEVEL_COLORS.get(record.levelname, RESET)
        record.levelname = f"{color}{record.levelname}{RESET}"
        return super().format(record)


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update({
            key: getattr(record, key)
            for key in CONTEXT_FIELDS
            if getattr(record, key, None) is not None
        })
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def setup_logging(
    log_file_path: str = "scrimflow.log",
    level: Union[int, str] = logging.INFO,
) -> None:
    """
    Attach the console and JSON file handlers to the ``scrimflow`` logger.

    Safe to call more than once; earlier handlers are replaced. If the
    log file cannot be opened the bot keeps running with console output.

    Args:
        log_file_path: JSON lines destination
        level: Logging level, as a number or a name such as "DEBUG"
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(TerminalFormatter(fmt=CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    logger.addHandler(console)

    try:
        log_path = Path(log_file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
    except OSError as e:
        logger.warning(f"Logging to console only, cannot open {log_file_path}: {e}")
        return
    file_handler.setFormatter(JSONFormatter())
    logger.addHandler(file_handler)


def log_and_terminate(error: "ConfigurationError", exit_code: int = 1) -> None:
    """Print the configuration report to stderr, log it and exit."""
    print(error.format_error_log(), file=sys.stderr)
    logger.critical(
        f"Bot stopped: {error.__class__.__name__}",
        extra={"command": "startup"},
    )
    sys.exit(exit_code)
