"""Provision and publish static websites to S3-compatible buckets."""

__version__ = "0.1.0"
