"""Diagnostic logging to stderr: plain text lines or JSON with a stable schema."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

from geocode_batch.common.constants import JSON_LOG_FIELDS
from geocode_batch.common.fs import ensure_dir
from geocode_batch.common.time_utils import utc_timestamp_iso


class JsonLineFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": utc_timestamp_iso(),
            "level": record.levelname,
            "run_id": getattr(record, "run_id", None),
            "event": getattr(record, "event", None),
            "status": getattr(record, "status", None),
            "attempt": getattr(record, "attempt", None),
            "address": getattr(record, "address", None),
            "query": getattr(record, "query", None),
            "error_code": getattr(record, "error_code", None),
            "rows_out": getattr(record, "rows_out", None),
            "duration_ms": getattr(record, "duration_ms", None),
            "message": record.getMessage(),
        }
        for field in JSON_LOG_FIELDS:
            payload.setdefault(field, None)
        return json.dumps(payload, ensure_ascii=False)


class TextLineFormatter(logging.Formatter):
    """One operator-facing line per event; level shown only when it matters."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.levelno >= logging.WARNING:
            return f"{record.levelname}: {message}"
        return message


def build_logger(
    run_id: str,
    level: str = "INFO",
    log_format: str = "text",
    log_path: Path | None = None,
) -> logging.Logger:
    logger = logging.getLogger(f"geocode_batch.{run_id}")
    logger.setLevel("WARNING" if level.upper() == "WARN" else level.upper())
    logger.propagate = False
    logger.handlers.clear()

    stream = logging.StreamHandler(sys.stderr)
    stream.setFormatter(JsonLineFormatter() if log_format == "json" else TextLineFormatter())
    logger.addHandler(stream)

    if log_path is not None:
        ensure_dir(log_path.parent)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(JsonLineFormatter())
        logger.addHandler(file_handler)

    return logger


def close_logger(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def log_event(logger: logging.Logger, message: str, level: int = logging.INFO, **event_fields: Any) -> None:
    logger.log(level, message, extra=event_fields)
