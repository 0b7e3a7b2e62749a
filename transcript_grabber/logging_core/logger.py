# transcript_grabber/logging_core/logger.py
"""
Structured logging for transcript acquisition.

Every record is emitted as one JSON line with:
- timestamp (ISO, UTC)
- level
- message
- run_id
- strategy (optional, filled by caller)
- event_type (start/success/inapplicable/failure/...)
- metadata (dict)

All modules obtain their logger through get_logger().
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from logging import Logger
from typing import Any, Dict, TextIO
from uuid import UUID


class JSONFormatter(logging.Formatter):
    """Formatter that renders a record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        log_record: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "message": record.getMessage(),
        }

        if hasattr(record, "run_id"):
            log_record["run_id"] = str(record.run_id)

        for field in ("strategy", "event_type", "metadata"):
            value = getattr(record, field, None)
            if value is not None:
                log_record[field] = value

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(log_record, ensure_ascii=False, default=str)


class RunIdFilter(logging.Filter):
    """Stamps every record with the run it belongs to."""

    def __init__(self, run_id: str) -> None:
        super().__init__()
        self.run_id = run_id

    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = self.run_id  # type: ignore[attr-defined]
        return True


LOGGER_NAMESPACE = "transcript_grabber.acquisition"

# One logger per run_id, alive until release_logger
_loggers: Dict[str, Logger] = {}


def get_logger(run_id: UUID, stream: TextIO | None = None) -> Logger:
    """
    Return the logger for one acquisition run.

    Records go to stderr as JSON lines so stdout stays free for transcript
    output. Idempotent per run_id.
    """
    run_id_str = str(run_id)

    if run_id_str in _loggers:
        return _loggers[run_id_str]

    # Not registered with logging.getLogger; release_logger drops the only reference
    logger = logging.Logger(f"{LOGGER_NAMESPACE}.{run_id_str}", logging.INFO)
    logger.propagate = False

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)

    logger.addFilter(RunIdFilter(run_id_str))
    _loggers[run_id_str] = logger
    return logger


def release_logger(run_id: UUID) -> None:
    """Drop the cached logger and its handlers once a run is finished."""
    logger = _loggers.pop(str(run_id), None)
    if logger is None:
        return
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def log_event(
    logger: Logger,
    level: int,
    message: str,
    *,
    strategy: str | None = None,
    event_type: str,
    metadata: Dict[str, Any] | None = None,
) -> None:
    """Structured logging shortcut used by the runner and every strategy."""
    extra: Dict[str, Any] = {"event_type": event_type}
    if strategy:
        extra["strategy"] = strategy
    if metadata:
        extra["metadata"] = metadata

    logger.log(level, message, extra=extra)


# High-Level Intent
# One JSON line per event, tagged with the run that produced it.
# A run is one acquisition for one video: runner.run_acquisition creates the
# run_id, every strategy logs through the same logger via the context.

# Edge Cases
# release_logger closes handlers and drops the only reference to the run logger,
# so long-lived processes (CLI loops, tests) do not accumulate one logger per run.
# Metadata values that are not JSON-serializable are rendered with str().
