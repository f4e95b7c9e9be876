"""Domain models for deployments and operation outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from .constants import MODE_LIVE, MODE_MOCK
from .utils.errors import ConfigError, DeployerError, sanitize_dict


class Mode(str, Enum):
    """Execution mode selecting the storage endpoint."""

    LIVE = MODE_LIVE
    MOCK = MODE_MOCK

    @classmethod
    def parse(cls, value: str | Mode) -> Mode:
        if isinstance(value, Mode):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ConfigError(
                f"Invalid mode {value!r}, expected one of: {', '.join(m.value for m in cls)}"
            ) from None


@dataclass(frozen=True)
class DeploymentTarget:
    """The single bucket a run deploys to."""

    bucket_name: str
    region: str
    mode: Mode


@dataclass(frozen=True)
class FileUploadTask:
    """One local file and the object key it is uploaded under."""

    absolute_path: Path
    relative_key: str


@dataclass
class OperationResult:
    """Outcome of a single storage operation.

    ``error_kind`` is None on success, otherwise the name of the
    DeployerError subclass describing the failure.
    """

    operation: str
    bucket: str
    ok: bool
    message: str
    error_kind: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def success(cls, operation: str, bucket: str, message: str, **details: Any) -> OperationResult:
        return cls(operation=operation, bucket=bucket, ok=True, message=message, details=details)

    @classmethod
    def failure(
        cls,
        operation: str,
        bucket: str,
        error: type[DeployerError] | DeployerError,
        message: str,
        **details: Any,
    ) -> OperationResult:
        return cls(
            operation=operation,
            bucket=bucket,
            ok=False,
            message=message,
            error_kind=error.kind,
            details=details,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "operation": self.operation,
            "bucket": self.bucket,
            "ok": self.ok,
            "error_kind": self.error_kind,
            "message": self.message,
            "details": sanitize_dict(self.details),
        }


@dataclass
class PublishReport:
    """Per-file outcomes of publishing a build directory."""

    bucket: str
    root: Path
    results: list[OperationResult] = field(default_factory=list)

    @property
    def uploaded(self) -> int:
        return sum(1 for r in self.results if r.ok)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.ok)

    @property
    def ok(self) -> bool:
        return self.failed == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "bucket": self.bucket,
            "root": str(self.root),
            "uploaded": self.uploaded,
            "failed": self.failed,
            "results": [r.to_dict() for r in self.results],
        }
