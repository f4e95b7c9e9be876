"""Base S3 provider interface."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol


class S3Provider(Protocol):
    """Protocol defining the S3 operations used to host a static website."""

    def create_bucket(self, name: str, region: str | None = None) -> str | None:
        """Create a bucket and return its location."""
        ...

    def put_public_access_block(self, name: str, config: dict[str, bool]) -> None:
        """Set the bucket's public access block configuration."""
        ...

    def set_bucket_policy(self, name: str, policy: dict[str, Any]) -> None:
        """Set bucket policy."""
        ...

    def put_bucket_website(self, name: str, website_config: dict[str, Any]) -> None:
        """Set bucket website configuration."""
        ...

    def get_bucket_website(self, name: str) -> dict[str, Any] | None:
        """Get bucket website configuration, None if not configured."""
        ...

    def delete_bucket_website(self, name: str) -> None:
        """Delete bucket website configuration."""
        ...

    def upload_file(self, name: str, key: str, path: Path, content_type: str | None = None) -> None:
        """Upload a local file as an object."""
        ...
