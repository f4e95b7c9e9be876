"""Unit tests for bucket provisioning."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError
from prometheus_client import REGISTRY

from s3_website_deployer.provisioner import BucketProvisioner


def _client_error(code: str, operation: str, message: str = "error") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


def _operation_count(operation: str, result: str) -> float:
    value = REGISTRY.get_sample_value(
        "s3_website_deployer_bucket_operations_total",
        {"operation": operation, "result": result},
    )
    return value or 0.0


class TestBucketProvisioner:
    """Test bucket provisioning steps."""

    @pytest.fixture
    def provider(self) -> MagicMock:
        """Create a mocked S3 provider."""
        provider = MagicMock()
        provider.create_bucket.return_value = "/my-site"
        provider.get_bucket_website.return_value = None
        return provider

    @pytest.fixture
    def provisioner(self, provider: MagicMock) -> BucketProvisioner:
        """Create a provisioner for us-east-1."""
        return BucketProvisioner(provider, region="us-east-1")

    def test_create_bucket_reports_location(self, provisioner, provider) -> None:
        """Test that the bucket location is reported."""
        result = provisioner.create_bucket("my-site")

        assert result.ok
        assert result.details["location"] == "/my-site"
        provider.create_bucket.assert_called_once_with("my-site", "us-east-1")

    def test_create_bucket_name_taken(self, provisioner, provider) -> None:
        """Test that a globally taken name is a BucketCreationError."""
        provider.create_bucket.side_effect = _client_error(
            "BucketAlreadyExists", "CreateBucket", "The requested bucket name is not available"
        )

        result = provisioner.create_bucket("taken-name")

        assert not result.ok
        assert result.error_kind == "BucketCreationError"
        assert "BucketAlreadyExists" in result.message
        assert result.details["error_code"] == "BucketAlreadyExists"

    def test_create_bucket_invalid_name(self, provisioner, provider) -> None:
        """Test that a malformed name is a BucketCreationError."""
        provider.create_bucket.side_effect = _client_error("InvalidBucketName", "CreateBucket")

        result = provisioner.create_bucket("Bad_Name")

        assert result.error_kind == "BucketCreationError"

    def test_create_bucket_already_owned(self, provisioner, provider) -> None:
        """Test that a bucket already owned by the caller counts as created."""
        provider.create_bucket.side_effect = _client_error("BucketAlreadyOwnedByYou", "CreateBucket")

        result = provisioner.create_bucket("my-site")

        assert result.ok
        assert result.details["already_exists"] is True

    def test_relax_public_access_block_flags(self, provisioner, provider) -> None:
        """Test that all four public access block flags are disabled."""
        result = provisioner.relax_public_access_block("my-site")

        assert result.ok
        provider.put_public_access_block.assert_called_once_with(
            "my-site",
            {
                "BlockPublicAcls": False,
                "IgnorePublicAcls": False,
                "BlockPublicPolicy": False,
                "RestrictPublicBuckets": False,
            },
        )

    def test_relax_public_access_block_denied(self, provisioner, provider) -> None:
        """Test that a denied access block change is a PolicyApplicationError."""
        provider.put_public_access_block.side_effect = _client_error("AccessDenied", "PutPublicAccessBlock")

        result = provisioner.relax_public_access_block("my-site")

        assert result.error_kind == "PolicyApplicationError"

    def test_apply_public_read_policy_is_idempotent(self, provisioner, provider) -> None:
        """Test that applying the policy twice sends the same document."""
        provisioner.apply_public_read_policy("my-site")
        provisioner.apply_public_read_policy("my-site")

        first, second = provider.set_bucket_policy.call_args_list
        assert first == second
        policy = first[0][1]
        assert policy["Statement"][0]["Resource"] == ["arn:aws:s3:::my-site/*"]
        assert policy["Statement"][0]["Action"] == ["s3:GetObject"]

    def test_apply_public_read_policy_rejected(self, provisioner, provider) -> None:
        """Test that a rejected policy is a PolicyApplicationError."""
        provider.set_bucket_policy.side_effect = _client_error("MalformedPolicy", "PutBucketPolicy")

        result = provisioner.apply_public_read_policy("my-site")

        assert result.error_kind == "PolicyApplicationError"

    def test_enable_website_hosting(self, provisioner, provider) -> None:
        """Test that index.html is the index document and no error document is set."""
        result = provisioner.enable_website_hosting("my-site")

        assert result.ok
        provider.put_bucket_website.assert_called_once_with(
            "my-site", {"IndexDocument": {"Suffix": "index.html"}}
        )

    def test_enable_website_hosting_failure(self, provisioner, provider) -> None:
        """Test that a failed website put is a WebsiteConfigError."""
        provider.put_bucket_website.side_effect = _client_error("NoSuchBucket", "PutBucketWebsite")

        result = provisioner.enable_website_hosting("my-site")

        assert result.error_kind == "WebsiteConfigError"

    def test_get_website_config_not_configured(self, provisioner, provider) -> None:
        """Test that a missing website configuration is reported, not failed."""
        result = provisioner.get_website_config("my-site")

        assert result.ok
        assert result.details["configured"] is False
        assert result.message == "Website configuration not found"

    def test_get_website_config_configured(self, provisioner, provider) -> None:
        """Test that the index document suffix is reported."""
        provider.get_bucket_website.return_value = {"IndexDocument": {"Suffix": "index.html"}}

        result = provisioner.get_website_config("my-site")

        assert result.ok
        assert result.details["configured"] is True
        assert result.details["index_document"] == "index.html"
        assert result.details["error_document"] is None

    def test_get_website_config_error(self, provisioner, provider) -> None:
        """Test that a read failure is a WebsiteConfigError."""
        provider.get_bucket_website.side_effect = _client_error("AccessDenied", "GetBucketWebsite")

        result = provisioner.get_website_config("my-site")

        assert result.error_kind == "WebsiteConfigError"

    def test_disable_website_hosting(self, provisioner, provider) -> None:
        """Test deleting the website configuration."""
        result = provisioner.disable_website_hosting("my-site")

        assert result.ok
        provider.delete_bucket_website.assert_called_once_with("my-site")

    def test_disable_website_hosting_failure(self, provisioner, provider) -> None:
        """Test that a failed delete is reported once and not retried."""
        provider.delete_bucket_website.side_effect = _client_error("AccessDenied", "DeleteBucketWebsite")

        result = provisioner.disable_website_hosting("my-site")

        assert result.error_kind == "WebsiteConfigError"
        assert provider.delete_bucket_website.call_count == 1

    def test_connection_error_is_classified(self, provisioner, provider) -> None:
        """Test that transport errors become results instead of raising."""
        provider.put_bucket_website.side_effect = EndpointConnectionError(
            endpoint_url="http://s3.localhost.localstack.cloud:4566"
        )

        result = provisioner.enable_website_hosting("my-site")

        assert not result.ok
        assert result.error_kind == "WebsiteConfigError"

    def test_provision_runs_steps_in_order(self, provisioner, provider) -> None:
        """Test the full provisioning sequence."""
        results = provisioner.provision("my-site")

        assert [r.operation for r in results] == [
            "create_bucket",
            "relax_public_access_block",
            "apply_public_read_policy",
            "enable_website_hosting",
        ]
        assert all(r.ok for r in results)
        assert [c[0] for c in provider.method_calls] == [
            "create_bucket",
            "put_public_access_block",
            "set_bucket_policy",
            "put_bucket_website",
        ]

    def test_provision_continues_after_failed_creation(self, provisioner, provider) -> None:
        """Test that a failed bucket creation does not stop later steps."""
        provider.create_bucket.side_effect = _client_error("BucketAlreadyExists", "CreateBucket")
        provider.put_public_access_block.side_effect = _client_error("NoSuchBucket", "PutPublicAccessBlock")
        provider.set_bucket_policy.side_effect = _client_error("NoSuchBucket", "PutBucketPolicy")
        provider.put_bucket_website.side_effect = _client_error("NoSuchBucket", "PutBucketWebsite")

        results = provisioner.provision("taken-name")

        assert [r.error_kind for r in results] == [
            "BucketCreationError",
            "PolicyApplicationError",
            "PolicyApplicationError",
            "WebsiteConfigError",
        ]
        provider.put_public_access_block.assert_called_once()
        provider.set_bucket_policy.assert_called_once()
        provider.put_bucket_website.assert_called_once()

    def test_operation_metrics(self, provisioner, provider) -> None:
        """Test that outcomes are counted per operation."""
        before_ok = _operation_count("enable_website_hosting", "success")
        before_failed = _operation_count("enable_website_hosting", "failed")

        provisioner.enable_website_hosting("my-site")
        provider.put_bucket_website.side_effect = _client_error("NoSuchBucket", "PutBucketWebsite")
        provisioner.enable_website_hosting("my-site")

        assert _operation_count("enable_website_hosting", "success") == before_ok + 1
        assert _operation_count("enable_website_hosting", "failed") == before_failed + 1

    def test_results_are_logged(self, provisioner, provider, caplog) -> None:
        """Test that each operation emits a structured log line."""
        provider.create_bucket.side_effect = _client_error("BucketAlreadyExists", "CreateBucket")

        with caplog.at_level("INFO", logger="s3_website_deployer.provisioner"):
            provisioner.create_bucket("taken-name")

        record = caplog.records[-1]
        assert record.levelname == "ERROR"
        assert '"operation": "create_bucket"' in record.getMessage()
        assert '"error_kind": "BucketCreationError"' in record.getMessage()
