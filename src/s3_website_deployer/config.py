"""Runtime configuration for the S3 Website Deployer."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any, Mapping

from .constants import (
    DEFAULT_BUCKET_NAME,
    DEFAULT_BUILD_DIR,
    DEFAULT_REGION,
    KEY_BASE_CWD,
    KEY_BASE_ROOT,
    MODE_MOCK,
)
from .models import DeploymentTarget, Mode
from .utils.errors import ConfigError

OUTPUT_FORMATS = ("text", "json")
KEY_BASES = (KEY_BASE_ROOT, KEY_BASE_CWD)


@dataclass(frozen=True)
class DeployerSettings:
    """Settings for one deployer run.

    Loaded from the environment and then overridden by command line flags.
    """

    bucket_name: str = DEFAULT_BUCKET_NAME
    mode: Mode = Mode.MOCK
    region: str = DEFAULT_REGION
    build_dir: str = DEFAULT_BUILD_DIR
    key_base: str = KEY_BASE_ROOT
    log_level: str = "INFO"
    output: str = "text"
    pushgateway_url: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> DeployerSettings:
        """Load settings from environment variables."""
        env = os.environ if environ is None else environ
        settings = cls(
            bucket_name=env.get("DEPLOYER_BUCKET_NAME", DEFAULT_BUCKET_NAME),
            mode=Mode.parse(env.get("DEPLOYER_MODE", MODE_MOCK)),
            region=env.get("DEPLOYER_REGION") or env.get("AWS_REGION") or DEFAULT_REGION,
            build_dir=env.get("DEPLOYER_BUILD_DIR", DEFAULT_BUILD_DIR),
            key_base=env.get("DEPLOYER_KEY_BASE", KEY_BASE_ROOT),
            log_level=env.get("DEPLOYER_LOG_LEVEL", "INFO"),
            output=env.get("DEPLOYER_OUTPUT", "text"),
            pushgateway_url=env.get("DEPLOYER_PUSHGATEWAY_URL") or None,
        )
        settings.validate()
        return settings

    def override(self, **overrides: Any) -> DeployerSettings:
        """Return a copy with every non-None override applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        if "mode" in values:
            values["mode"] = Mode.parse(values["mode"])
        updated = replace(self, **values)
        updated.validate()
        return updated

    def validate(self) -> None:
        """Validate settings values.

        Raises:
            ConfigError: If a value is outside its allowed set
        """
        if not self.bucket_name:
            raise ConfigError("bucket name must not be empty")
        if self.key_base not in KEY_BASES:
            raise ConfigError(f"Invalid key base {self.key_base!r}, expected one of: {', '.join(KEY_BASES)}")
        if self.output not in OUTPUT_FORMATS:
            raise ConfigError(f"Invalid output {self.output!r}, expected one of: {', '.join(OUTPUT_FORMATS)}")

    def target(self) -> DeploymentTarget:
        """Build the immutable deployment target for this run."""
        return DeploymentTarget(bucket_name=self.bucket_name, region=self.region, mode=self.mode)
