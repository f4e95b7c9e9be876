"""Builder for bucket policy documents."""

from __future__ import annotations

from typing import Any

from ..constants import POLICY_SID_PUBLIC_READ, POLICY_VERSION


def build_public_read_policy(bucket_name: str) -> dict[str, Any]:
    """Create a policy granting anonymous GetObject on every object in a bucket.

    Args:
        bucket_name: Bucket the policy applies to

    Returns:
        Policy document in AWS format
    """
    return {
        "Version": POLICY_VERSION,
        "Statement": [
            {
                "Sid": POLICY_SID_PUBLIC_READ,
                "Effect": "Allow",
                "Principal": "*",
                "Action": ["s3:GetObject"],
                "Resource": [f"arn:aws:s3:::{bucket_name}/*"],
            }
        ],
    }
