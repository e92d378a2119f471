"""Centralized logging configuration using Loguru.

Every module logs through the single configured Loguru logger exported here.

Usage:
    from sourcevault.utils.logging import logger
    logger.info("Message")
    logger.debug("Debug message")  # Only shows if SOURCEVAULT_LOG_LEVEL=DEBUG

Environment Variables:
    SOURCEVAULT_LOG_LEVEL: DEBUG|INFO|WARNING|ERROR (default: INFO)
    SOURCEVAULT_LOG_JSON: 0|1 (default: 0, human-readable)
    SOURCEVAULT_LOG_FILE: path to a rotating log file (optional)
    SOURCEVAULT_RUN_ID: correlation ID attached to JSON records
"""

import json
import os
import sys
import uuid
from pathlib import Path

from loguru import logger

# Remove default handler
logger.remove()

# Numeric levels for NDJSON output
JSON_LEVELS = {
    "TRACE": 10,
    "DEBUG": 20,
    "INFO": 30,
    "SUCCESS": 35,
    "WARNING": 40,
    "ERROR": 50,
    "CRITICAL": 60,
}

_log_level = os.environ.get("SOURCEVAULT_LOG_LEVEL", "INFO").upper()
_json_mode = os.environ.get("SOURCEVAULT_LOG_JSON", "0") == "1"
_log_file = os.environ.get("SOURCEVAULT_LOG_FILE")
_run_id = os.environ.get("SOURCEVAULT_RUN_ID") or str(uuid.uuid4())


def _to_json_record(record) -> dict:
    """Flatten a loguru record into a single JSON-serializable dict."""
    payload = {
        "level": JSON_LEVELS.get(record["level"].name, 30),
        "time": int(record["time"].timestamp() * 1000),
        "msg": record["message"],
        "pid": record["process"].id,
        "run_id": record["extra"].get("run_id", _run_id),
    }

    for key, value in record["extra"].items():
        if key != "run_id":
            payload[key] = value

    if record["exception"]:
        payload["err"] = {
            "type": record["exception"].type.__name__ if record["exception"].type else "Error",
            "message": str(record["exception"].value) if record["exception"].value else "",
        }
    return payload


def json_sink(message):
    """Write log records as NDJSON to stdout.

    CRITICAL: Never call logger.* inside a sink - causes infinite recursion
    """
    sys.stdout.write(json.dumps(_to_json_record(message.record), default=str) + "\n")
    sys.stdout.flush()


_human_format = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}:{function}:{line}</cyan> - "
    "<level>{message}</level>"
)

logger.level("DEBUG", color="<blue>")
logger.level("INFO", color="<white>")
logger.level("WARNING", color="<yellow>")
logger.level("ERROR", color="<red>")
logger.level("CRITICAL", color="<red><bold>")

if _json_mode:
    logger.add(
        json_sink,
        level=_log_level,
        colorize=False,
    )
else:
    logger.add(
        sys.stderr,
        level=_log_level,
        format=_human_format,
        colorize=None,  # Auto-detect: colors if TTY, plain if piped
    )


def add_file_sink(log_file: Path, level: str = "DEBUG") -> int:
    """Add a rotating file handler for persistent logs.

    Args:
        log_file: Log file path, parent directories are created
        level: Minimum log level for file output

    Returns:
        The loguru handler id
    """
    log_file.parent.mkdir(parents=True, exist_ok=True)

    # File logging uses human-readable format (for manual inspection)
    return logger.add(
        log_file,
        rotation="10 MB",
        retention="7 days",
        level=level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
    )


if _log_file:
    add_file_sink(Path(_log_file))


def get_run_id() -> str:
    """Get the correlation ID of the current process."""
    return _run_id


__all__ = [
    "logger",
    "add_file_sink",
    "get_run_id",
]
