"""Structured logging configuration for the S3 object store client."""

import json
import logging
import sys
from typing import Any


def setup_structured_logging(level: int = logging.INFO) -> None:
    """Configure structured JSON logging."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def log_operation_event(
    logger: logging.Logger,
    operation: str,
    bucket: str,
    result: str,
    message: str,
    key: str | None = None,
    **kwargs: Any,
) -> None:
    """Log a structured object store operation event."""
    log_data: dict[str, Any] = {
        "operation": operation,
        "bucket": bucket,
        "result": result,
        "message": message,
    }
    if key is not None:
        log_data["key"] = key
    log_data.update(kwargs)
    logger.info(json.dumps(sanitize_secrets(log_data), default=str))


def sanitize_secrets(log_data: dict[str, Any]) -> dict[str, Any]:
    """Remove secret fields from log data."""
    secret_fields = {"access_key", "secret_key", "session_token", "password"}
    sanitized = log_data.copy()
    for field in secret_fields:
        if field in sanitized:
            sanitized[field] = "***REDACTED***"
    return sanitized
