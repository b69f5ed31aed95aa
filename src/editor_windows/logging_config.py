"""Structured logging setup (JSONL format)."""

from __future__ import annotations

import json
import sys
import traceback
from contextvars import ContextVar
from pathlib import Path

import platformdirs
from loguru import logger

APP_NAME = "editor-windows"
LOG_FILE_NAME = "resolver.jsonl"

# Correlation ID for one resolution pass
trace_id_var: ContextVar[str | None] = ContextVar("trace_id", default=None)


# Extra keys promoted to top-level fields; everything else lands in "context"
PROMOTED_KEYS = frozenset({"operation", "status", "trace_id", "metrics"})


def build_log_entry(record) -> dict:
    """Turn a loguru record into one JSONL object.

    The trace id falls back to the active resolution pass when the call
    site did not pass one.
    """
    extra = record["extra"]
    entry = {
        "timestamp": record["time"].strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z",
        "level": record["level"].name.lower(),
        "component": f"{record['name']}.{record['function']}",
        "operation": extra.get("operation", "unknown"),
        "operation_status": extra.get("status"),
        "trace_id": extra.get("trace_id") or trace_id_var.get(),
        "message": record["message"],
        "context": {key: value for key, value in extra.items() if key not in PROMOTED_KEYS},
        "metrics": extra.get("metrics", {}),
        "error": None
    }

    exception = record["exception"]
    if exception is not None and exception.type is not None:
        entry["error"] = {
            "type": exception.type.__name__,
            "message": str(exception.value),
            "traceback_lines": traceback.format_tb(exception.traceback),
        }

    return entry


def json_sink(message):
    """JSONL sink - writes one object per line to stderr."""
    try:
        sys.stderr.write(json.dumps(build_log_entry(message.record), default=str) + "\n")
    except (OSError, TypeError, ValueError) as e:
        sys.stderr.write(f"[LOG_ERROR] Failed to write log: {e}\n")


def setup_logger(level: str = "INFO", file_logging: bool = True):
    """Configure Loguru for machine-readable JSONL output.

    Args:
        level: Minimum level for the stderr sink.
        file_logging: Also write a rotating file in the OS log directory.

    Returns:
        The configured loguru logger.
    """
    logger.remove()

    logger.add(
        json_sink,
        level=level.upper()
    )

    if file_logging:
        # macOS: ~/Library/Logs/editor-windows/
        # Linux: ~/.local/state/editor-windows/log/
        log_dir = Path(platformdirs.user_log_dir(
            appname=APP_NAME,
            ensure_exists=True
        ))

        logger.add(
            str(log_dir / LOG_FILE_NAME),
            format="{message}",
            serialize=True,
            rotation="10 MB",
            retention="7 days",
            compression="gz",
            level="DEBUG"
        )

    return logger
