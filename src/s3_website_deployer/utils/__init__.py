"""Utility functions for the S3 Website Deployer."""

from .errors import (
    BucketCreationError,
    ConfigError,
    DeployerError,
    FilesystemError,
    PolicyApplicationError,
    UploadError,
    WebsiteConfigError,
    describe_error,
    get_error_code,
    sanitize_dict,
    sanitize_error_message,
    sanitize_exception,
)

__all__ = [
    "DeployerError",
    "FilesystemError",
    "BucketCreationError",
    "PolicyApplicationError",
    "WebsiteConfigError",
    "UploadError",
    "ConfigError",
    "describe_error",
    "get_error_code",
    "sanitize_dict",
    "sanitize_error_message",
    "sanitize_exception",
]
