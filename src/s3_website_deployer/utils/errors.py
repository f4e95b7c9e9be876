"""Error taxonomy and sanitization utilities."""

from __future__ import annotations

import re
from typing import Any

from botocore.exceptions import ClientError


class DeployerError(Exception):
    """Base class for all deployer errors."""

    kind = "DeployerError"


class FilesystemError(DeployerError):
    """A directory or file could not be read."""

    kind = "FilesystemError"


class BucketCreationError(DeployerError):
    """The bucket name is taken or invalid."""

    kind = "BucketCreationError"


class PolicyApplicationError(DeployerError):
    """The public access block or bucket policy was rejected."""

    kind = "PolicyApplicationError"


class WebsiteConfigError(DeployerError):
    """A website configuration put/get/delete failed."""

    kind = "WebsiteConfigError"


class UploadError(DeployerError):
    """A single object upload failed."""

    kind = "UploadError"


class ConfigError(DeployerError, ValueError):
    """Invalid deployer configuration."""

    kind = "ConfigError"


# Patterns that might expose sensitive information
SENSITIVE_PATTERNS = [
    r"access[_\s]?key[_\s]?id[:=\s]+([A-Z0-9]{16,128})",
    r"secret[_\s]?access[_\s]?key[:=\s]+([A-Za-z0-9/+=]{40})",
    r"session[_\s]?token[:=\s]+([A-Za-z0-9/+=]+)",
    r"Credential=([A-Z0-9]{16,128})",
]

# Fields to redact completely
SENSITIVE_FIELDS = {
    "access_key_id",
    "secret_access_key",
    "session_token",
    "password",
    "credentials",
    "token",
}


def sanitize_error_message(message: str) -> str:
    """Sanitize error message to remove credentials.

    Args:
        message: Original error message

    Returns:
        Sanitized error message with credential values redacted
    """
    sanitized = message
    for pattern in SENSITIVE_PATTERNS:
        sanitized = re.sub(
            pattern,
            lambda m: m.group(0).replace(m.group(1), "[REDACTED]"),
            sanitized,
            flags=re.IGNORECASE,
        )
    return sanitized


def sanitize_exception(error: BaseException) -> str:
    """Sanitize exception message."""
    return sanitize_error_message(str(error))


def sanitize_dict(data: dict[str, Any], sensitive_keys: set[str] | None = None) -> dict[str, Any]:
    """Sanitize dictionary by redacting sensitive fields.

    Args:
        data: Dictionary to sanitize
        sensitive_keys: Additional keys to redact (merged with SENSITIVE_FIELDS)

    Returns:
        Sanitized dictionary with sensitive values redacted
    """
    all_sensitive = SENSITIVE_FIELDS | (sensitive_keys or set())
    sanitized: dict[str, Any] = {}

    for key, value in data.items():
        key_lower = key.lower()
        if any(sensitive in key_lower for sensitive in all_sensitive):
            sanitized[key] = "[REDACTED]"
        elif isinstance(value, dict):
            sanitized[key] = sanitize_dict(value, sensitive_keys)
        elif isinstance(value, str):
            sanitized[key] = sanitize_error_message(value)
        else:
            sanitized[key] = value

    return sanitized


def get_error_code(error: BaseException) -> str | None:
    """Return the service error code of a botocore ClientError, if any."""
    if isinstance(error, ClientError):
        return error.response.get("Error", {}).get("Code")
    return None


def describe_error(error: BaseException) -> str:
    """Build a short, sanitized description of a storage or filesystem error."""
    if isinstance(error, ClientError):
        err = error.response.get("Error", {})
        code = err.get("Code", "Unknown")
        message = err.get("Message") or str(error)
        return sanitize_error_message(f"{code}: {message}")
    return sanitize_exception(error)
