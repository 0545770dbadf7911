# scaffel/logging_config.py
"""
Stderr-only logging configuration.

Stdout carries generated markdown and CLI output, so ALL logging
goes to stderr.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

_LEVELS = {
    "quiet": logging.WARNING,
    "normal": logging.INFO,
    "verbose": logging.DEBUG,
}


class JsonFormatter(logging.Formatter):
    """Formats log records as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON line."""
        log_data: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        if record.exc_info:
            log_data["exc"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def configure_logging(verbosity: str = "normal", json_logs: bool = False) -> None:
    """
    Route logging to stderr.

    Clears existing root handlers so repeated CLI invocations in one
    process do not stack handlers.

    Args:
        verbosity: quiet, normal or verbose
        json_logs: Emit JSON lines instead of human-readable lines
    """
    handler = logging.StreamHandler(sys.stderr)
    if json_logs:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s  %(levelname)-7s  %(message)s", datefmt="%H:%M:%S")
        )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(_LEVELS.get(verbosity, logging.INFO))
