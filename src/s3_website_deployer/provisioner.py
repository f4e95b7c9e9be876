"""Bucket provisioning for static website hosting."""

from __future__ import annotations

import logging
from typing import Callable

from botocore.exceptions import BotoCoreError, ClientError

from . import metrics
from .builders.policy import build_public_read_policy
from .constants import (
    ERR_BUCKET_ALREADY_OWNED,
    OP_APPLY_PUBLIC_READ_POLICY,
    OP_CREATE_BUCKET,
    OP_DISABLE_WEBSITE_HOSTING,
    OP_ENABLE_WEBSITE_HOSTING,
    OP_GET_WEBSITE_CONFIG,
    OP_RELAX_PUBLIC_ACCESS_BLOCK,
)
from .logging import log_operation_event
from .models import OperationResult
from .services.aws.models import PublicAccessConfig, WebsitePolicy
from .services.s3.base import S3Provider
from .tracing import set_span_status, trace_span
from .utils.errors import (
    BucketCreationError,
    DeployerError,
    PolicyApplicationError,
    WebsiteConfigError,
    describe_error,
    get_error_code,
)

STORAGE_ERRORS = (ClientError, BotoCoreError)

# All four flags off so a public bucket policy can take effect
PUBLIC_ACCESS_RELAXED = PublicAccessConfig(
    block_public_acls=False,
    block_public_policy=False,
    ignore_public_acls=False,
    restrict_public_buckets=False,
)

WEBSITE_POLICY = WebsitePolicy()


class BucketProvisioner:
    """Configures a bucket to serve a public static website.

    Each operation is one round trip to the storage service and returns an
    OperationResult instead of raising, so a failed step never prevents the
    next one from being attempted.
    """

    def __init__(self, provider: S3Provider, region: str | None = None) -> None:
        self.provider = provider
        self.region = region
        self.logger = logging.getLogger(__name__)

    def _record(self, result: OperationResult) -> OperationResult:
        metrics.bucket_operations_total.labels(
            operation=result.operation,
            result="success" if result.ok else "failed",
        ).inc()
        set_span_status(result.ok, None if result.ok else result.message)
        log_operation_event(
            self.logger,
            operation=result.operation,
            bucket=result.bucket,
            result="success" if result.ok else "failed",
            message=result.message,
            level=logging.INFO if result.ok else logging.ERROR,
            error_kind=result.error_kind,
            **result.details,
        )
        return result

    def _run(
        self,
        operation: str,
        name: str,
        error: type[DeployerError],
        call: Callable[[], OperationResult],
    ) -> OperationResult:
        with trace_span(operation, bucket=name):
            try:
                result = call()
            except STORAGE_ERRORS as e:
                result = OperationResult.failure(
                    operation,
                    name,
                    error,
                    describe_error(e),
                    error_code=get_error_code(e),
                )
            return self._record(result)

    def create_bucket(self, name: str) -> OperationResult:
        """Create the bucket and report its location.

        A bucket already owned by the caller counts as created; a name taken
        by someone else, or a malformed one, is a BucketCreationError.
        """

        def call() -> OperationResult:
            try:
                location = self.provider.create_bucket(name, self.region)
            except ClientError as e:
                if get_error_code(e) == ERR_BUCKET_ALREADY_OWNED:
                    return OperationResult.success(
                        OP_CREATE_BUCKET, name, f"Bucket {name} already exists and is owned by you",
                        already_exists=True,
                    )
                raise
            return OperationResult.success(
                OP_CREATE_BUCKET, name, f"Created bucket {name}", location=location
            )

        return self._run(OP_CREATE_BUCKET, name, BucketCreationError, call)

    def relax_public_access_block(self, name: str) -> OperationResult:
        """Disable all four public access block flags on the bucket."""

        def call() -> OperationResult:
            self.provider.put_public_access_block(name, PUBLIC_ACCESS_RELAXED.to_aws())
            return OperationResult.success(
                OP_RELAX_PUBLIC_ACCESS_BLOCK, name, f"Public access block disabled for {name}"
            )

        return self._run(OP_RELAX_PUBLIC_ACCESS_BLOCK, name, PolicyApplicationError, call)

    def apply_public_read_policy(self, name: str) -> OperationResult:
        """Attach the anonymous GetObject policy to the bucket."""

        def call() -> OperationResult:
            policy = build_public_read_policy(name)
            self.provider.set_bucket_policy(name, policy)
            return OperationResult.success(
                OP_APPLY_PUBLIC_READ_POLICY, name, f"Public read policy applied to {name}", policy=policy
            )

        return self._run(OP_APPLY_PUBLIC_READ_POLICY, name, PolicyApplicationError, call)

    def enable_website_hosting(self, name: str) -> OperationResult:
        """Serve the bucket as a website with index.html as the index document."""

        def call() -> OperationResult:
            self.provider.put_bucket_website(name, WEBSITE_POLICY.to_aws())
            return OperationResult.success(
                OP_ENABLE_WEBSITE_HOSTING,
                name,
                f"Website hosting enabled for {name}",
                index_document=WEBSITE_POLICY.index_document,
            )

        return self._run(OP_ENABLE_WEBSITE_HOSTING, name, WebsiteConfigError, call)

    def get_website_config(self, name: str) -> OperationResult:
        """Read the website configuration; a missing one is not an error."""

        def call() -> OperationResult:
            config = self.provider.get_bucket_website(name)
            suffix = (config or {}).get("IndexDocument", {}).get("Suffix")
            if not suffix:
                return OperationResult.success(
                    OP_GET_WEBSITE_CONFIG, name, "Website configuration not found", configured=False
                )
            return OperationResult.success(
                OP_GET_WEBSITE_CONFIG,
                name,
                f"Index document suffix: {suffix}",
                configured=True,
                index_document=suffix,
                error_document=config.get("ErrorDocument", {}).get("Key"),
            )

        return self._run(OP_GET_WEBSITE_CONFIG, name, WebsiteConfigError, call)

    def disable_website_hosting(self, name: str) -> OperationResult:
        """Delete the bucket's website configuration."""

        def call() -> OperationResult:
            self.provider.delete_bucket_website(name)
            return OperationResult.success(
                OP_DISABLE_WEBSITE_HOSTING, name, "Website configuration deleted successfully"
            )

        return self._run(OP_DISABLE_WEBSITE_HOSTING, name, WebsiteConfigError, call)

    def provision(self, name: str) -> list[OperationResult]:
        """Run all four provisioning steps in order.

        Steps are not gated on earlier ones: if the bucket could not be
        created, the remaining steps still run and fail on their own.
        """
        return [
            self.create_bucket(name),
            self.relax_public_access_block(name),
            self.apply_public_read_policy(name),
            self.enable_website_hosting(name),
        ]
