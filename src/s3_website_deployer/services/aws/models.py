"""Models for AWS S3 operations."""

from __future__ import annotations

from dataclasses import dataclass

from ...constants import INDEX_DOCUMENT


@dataclass(frozen=True)
class Credentials:
    """Access key pair, with a session token for temporary credentials."""

    access_key_id: str
    secret_access_key: str
    session_token: str | None = None

    def __repr__(self) -> str:
        token = "'***'" if self.session_token else "None"
        return (
            f"Credentials(access_key_id={self.access_key_id!r}, secret_access_key='***', "
            f"session_token={token})"
        )


@dataclass(frozen=True)
class ClientConfig:
    """Configuration for the boto3 S3 client.

    ``endpoint_url`` is None in live mode so boto3 default routing applies.
    ``credentials`` is None when boto3's default credential chain should be used.
    """

    region: str | None
    credentials: Credentials | None = None
    endpoint_url: str | None = None


@dataclass(frozen=True)
class PublicAccessConfig:
    """Configuration for public access blocking."""

    block_public_acls: bool = True
    block_public_policy: bool = True
    ignore_public_acls: bool = True
    restrict_public_buckets: bool = True

    def to_aws(self) -> dict[str, bool]:
        return {
            "BlockPublicAcls": self.block_public_acls,
            "IgnorePublicAcls": self.ignore_public_acls,
            "BlockPublicPolicy": self.block_public_policy,
            "RestrictPublicBuckets": self.restrict_public_buckets,
        }


@dataclass(frozen=True)
class WebsitePolicy:
    """Website hosting configuration for a bucket."""

    index_document: str = INDEX_DOCUMENT
    error_document: str | None = None

    def to_aws(self) -> dict[str, dict[str, str]]:
        config = {"IndexDocument": {"Suffix": self.index_document}}
        if self.error_document:
            config["ErrorDocument"] = {"Key": self.error_document}
        return config
