"""Structured logging configuration for the S3 Website Deployer."""

import json
import logging
import sys
from typing import Any

from .constants import TOOL_NAME


def setup_structured_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging.

    Log lines go to stderr so that stdout carries only the status report.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )
    # botocore is chatty at DEBUG and logs request signing details
    logging.getLogger("botocore").setLevel(logging.WARNING)


def log_operation_event(
    logger: logging.Logger,
    operation: str,
    bucket: str,
    result: str,
    message: str,
    level: int = logging.INFO,
    **kwargs: Any,
) -> None:
    """Log a structured operation event."""
    log_data = {
        "tool": TOOL_NAME,
        "operation": operation,
        "bucket": bucket,
        "result": result,
        "message": message,
    }
    log_data.update(sanitize_secrets(kwargs))
    logger.log(level, json.dumps(log_data, default=str))


def sanitize_secrets(log_data: dict[str, Any]) -> dict[str, Any]:
    """Remove secret fields from log data."""
    secret_fields = {"access_key_id", "secret_access_key", "session_token", "password"}
    sanitized = log_data.copy()
    for field in secret_fields:
        if field in sanitized:
            sanitized[field] = "***REDACTED***"
    return sanitized
