"""Prometheus metrics for the S3 Website Deployer."""

from prometheus_client import REGISTRY, Counter, Histogram, push_to_gateway

from .constants import TOOL_NAME

# Bucket provisioning metrics
bucket_operations_total = Counter(
    "s3_website_deployer_bucket_operations_total",
    "Total number of S3 bucket operations",
    ["operation", "result"],
)

# Object upload metrics
object_uploads_total = Counter(
    "s3_website_deployer_object_uploads_total",
    "Total number of object uploads",
    ["result"],
)

# API call metrics
api_call_duration_seconds = Histogram(
    "s3_website_deployer_api_call_duration_seconds",
    "Duration of storage API calls in seconds",
    ["operation"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0],
)


def push_metrics(gateway_url: str, job: str = TOOL_NAME) -> None:
    """Push the collected run metrics to a Prometheus Pushgateway.

    A deploy run is too short-lived to be scraped, so metrics are pushed
    once at the end of the run instead.
    """
    push_to_gateway(gateway_url, job=job, registry=REGISTRY)
