"""AWS S3 client implementation."""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from ... import metrics
from ...constants import ERR_NO_SUCH_WEBSITE

logger = logging.getLogger(__name__)


class AWSProvider:
    """AWS S3 provider implementation.

    Every method is a single request/response call. Failures are logged and
    re-raised for the caller to classify.
    """

    def __init__(
        self,
        region: str | None,
        endpoint: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
        session_token: str | None = None,
    ) -> None:
        """Initialize AWS S3 provider.

        Args:
            region: AWS region, None for boto3 default resolution
            endpoint: Optional endpoint URL override (emulator)
            access_key: Optional access key ID
            secret_key: Optional secret access key
            session_token: Optional session token for temporary credentials
        """
        self.endpoint = endpoint
        self.region = region

        config = Config(signature_version="s3v4")

        self.client = boto3.client(
            "s3",
            endpoint_url=endpoint,
            region_name=region,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            aws_session_token=session_token,
            config=config,
        )

    def _call(self, operation: str, method: str, **params: Any) -> dict[str, Any]:
        """Invoke a client method, recording its duration."""
        start_time = time.time()
        try:
            return getattr(self.client, method)(**params)
        finally:
            metrics.api_call_duration_seconds.labels(operation=operation).observe(time.time() - start_time)

    def create_bucket(self, name: str, region: str | None = None) -> str | None:
        """Create a bucket.

        Args:
            name: Bucket name
            region: Bucket region; us-east-1 takes no location constraint

        Returns:
            The Location reported by the service
        """
        try:
            create_params: dict[str, Any] = {"Bucket": name}
            if region and region != "us-east-1":
                create_params["CreateBucketConfiguration"] = {"LocationConstraint": region}

            response = self._call("create_bucket", "create_bucket", **create_params)
            location = response.get("Location")
            logger.info(f"Created bucket {name} at {location}")
            return location
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to create bucket {name}: {e}")
            raise

    def put_public_access_block(self, name: str, config: dict[str, bool]) -> None:
        """Set the bucket public access block configuration."""
        try:
            self._call(
                "put_public_access_block",
                "put_public_access_block",
                Bucket=name,
                PublicAccessBlockConfiguration=config,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to set public access block for bucket {name}: {e}")
            raise

    def set_bucket_policy(self, name: str, policy: dict[str, Any]) -> None:
        """Set bucket policy."""
        policy_json = json.dumps(policy)
        logger.debug(f"Policy JSON for bucket {name}: {policy_json}")
        try:
            self._call("put_bucket_policy", "put_bucket_policy", Bucket=name, Policy=policy_json)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to set policy for bucket {name}: {e}")
            raise

    def put_bucket_website(self, name: str, website_config: dict[str, Any]) -> None:
        """Set bucket website configuration."""
        try:
            self._call(
                "put_bucket_website",
                "put_bucket_website",
                Bucket=name,
                WebsiteConfiguration=website_config,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to set website configuration for bucket {name}: {e}")
            raise

    def get_bucket_website(self, name: str) -> dict[str, Any] | None:
        """Get bucket website configuration.

        Returns:
            Website configuration if set, None if the bucket has none
        """
        try:
            response = self._call("get_bucket_website", "get_bucket_website", Bucket=name)
            response.pop("ResponseMetadata", None)
            return response
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") == ERR_NO_SUCH_WEBSITE:
                return None
            logger.error(f"Failed to get website configuration for bucket {name}: {e}")
            raise
        except BotoCoreError as e:
            logger.error(f"Failed to get website configuration for bucket {name}: {e}")
            raise

    def delete_bucket_website(self, name: str) -> None:
        """Delete bucket website configuration."""
        try:
            self._call("delete_bucket_website", "delete_bucket_website", Bucket=name)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to delete website configuration for bucket {name}: {e}")
            raise

    def upload_file(self, name: str, key: str, path: Path, content_type: str | None = None) -> None:
        """Upload a local file as an object.

        The file is streamed from disk and closed once the call returns.

        Args:
            name: Bucket name
            key: Object key, used verbatim
            path: Local file path
            content_type: Optional Content-Type header
        """
        params: dict[str, Any] = {"Bucket": name, "Key": key}
        if content_type:
            params["ContentType"] = content_type
        try:
            with open(path, "rb") as body:
                self._call("put_object", "put_object", Body=body, **params)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to upload {path} to {name}/{key}: {e}")
            raise
