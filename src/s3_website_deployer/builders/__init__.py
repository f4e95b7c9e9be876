"""Builders for storage clients and bucket documents."""

from .client import create_provider, resolve
from .policy import build_public_read_policy

__all__ = ["create_provider", "resolve", "build_public_read_policy"]
