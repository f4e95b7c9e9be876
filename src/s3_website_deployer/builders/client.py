"""Endpoint resolution and S3 provider construction."""

from __future__ import annotations

import os
from typing import Mapping

from ..constants import (
    MOCK_ACCESS_KEY_ID,
    MOCK_ENDPOINT_URL,
    MOCK_REGION,
    MOCK_SECRET_ACCESS_KEY,
)
from ..models import Mode
from ..services.aws.client import AWSProvider
from ..services.aws.models import ClientConfig, Credentials


def resolve(
    mode: Mode | str,
    region: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> ClientConfig:
    """Resolve the S3 client configuration for an execution mode.

    Mock mode always targets the local emulator in its fixed region. Live
    mode has no endpoint override; region and credentials fall back to
    boto3's default resolution when not given.

    Args:
        mode: Execution mode
        region: Target region (ignored in mock mode)
        environ: Environment to read credentials from (defaults to os.environ)

    Returns:
        Client configuration for the mode
    """
    mode = Mode.parse(mode)
    env = os.environ if environ is None else environ
    credentials = _environment_credentials(env)

    if mode is Mode.MOCK:
        # The emulator accepts any key pair
        return ClientConfig(
            region=MOCK_REGION,
            credentials=credentials
            or Credentials(access_key_id=MOCK_ACCESS_KEY_ID, secret_access_key=MOCK_SECRET_ACCESS_KEY),
            endpoint_url=MOCK_ENDPOINT_URL,
        )

    return ClientConfig(region=region, credentials=credentials, endpoint_url=None)


def _environment_credentials(env: Mapping[str, str]) -> Credentials | None:
    """Read the credential pair from the environment, only when both halves are set."""
    access_key = env.get("AWS_ACCESS_KEY_ID")
    secret_key = env.get("AWS_SECRET_ACCESS_KEY")
    if not (access_key and secret_key):
        return None
    return Credentials(
        access_key_id=access_key,
        secret_access_key=secret_key,
        session_token=env.get("AWS_SESSION_TOKEN") or None,
    )


def create_provider(client_config: ClientConfig) -> AWSProvider:
    """Create an S3 provider instance from a resolved client configuration."""
    credentials = client_config.credentials
    return AWSProvider(
        region=client_config.region,
        endpoint=client_config.endpoint_url,
        access_key=credentials.access_key_id if credentials else None,
        secret_key=credentials.secret_access_key if credentials else None,
        session_token=credentials.session_token if credentials else None,
    )
