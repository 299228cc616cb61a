"""Console logging for mirror runs.

A run is usually started from cron, so everything goes to stdout: either
human-readable lines or, with LOG_JSON, one JSON object per line that a
log collector can ingest. Per-story records carry a `story_id` extra.
"""

import json
import logging
import sys
from typing import Any

from lobsters_gopher.utils.config import get_settings

CONSOLE_HANDLER_NAME = "lobsters_gopher.console"

# Extras copied into JSON records when a call site sets them
_RECORD_EXTRAS = ("story_id",)

# Loggers of libraries that are chatty below WARNING
_QUIET_LOGGERS = ("httpx", "httpcore")


class JsonFormatter(logging.Formatter):
    """One JSON object per record, tagged with the application name."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "app_name": get_settings().APP_NAME,
        }
        for key in _RECORD_EXTRAS:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data)


class StandardFormatter(logging.Formatter):
    """`[2026-10-18 09:05:00] INFO - lobsters_gopher.workflow.pipeline - ...`"""

    def __init__(self) -> None:
        super().__init__(
            fmt="[%(asctime)s] %(levelname)s - %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


_logging_configured = False


def _console_handler(level: int, use_json: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(CONSOLE_HANDLER_NAME)
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter() if use_json else StandardFormatter())
    return handler


def setup_logging(use_json: bool | None = None, force_reconfigure: bool = False) -> None:
    """Install the console handler on the root logger.

    The level comes from LOG_LEVEL. Calling this again is a no-op unless
    `force_reconfigure` is set, in which case our previous handler is
    replaced; handlers installed by others (pytest's caplog) are kept.

    Args:
        use_json: Emit JSON lines; None defers to LOG_JSON
        force_reconfigure: Replace an existing configuration
    """
    global _logging_configured

    if _logging_configured and not force_reconfigure:
        return

    settings = get_settings()
    level = getattr(logging, settings.LOG_LEVEL)
    if use_json is None:
        use_json = settings.LOG_JSON

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if handler.get_name() == CONSOLE_HANDLER_NAME:
            root_logger.removeHandler(handler)

    root_logger.setLevel(level)
    root_logger.addHandler(_console_handler(level, use_json))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    _logging_configured = True
    logging.getLogger(__name__).debug(
        f"Console logging at {settings.LOG_LEVEL} ({'json' if use_json else 'text'})"
    )


def reset_logging() -> None:
    """Drop all root handlers and forget the configuration (tests)."""
    global _logging_configured

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(logging.WARNING)
    _logging_configured = False
