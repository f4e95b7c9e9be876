"""Uploading a local build directory to a website bucket."""

from __future__ import annotations

import logging
import mimetypes
import os
import shutil
import subprocess
from pathlib import Path
from typing import Callable, Mapping

from botocore.exceptions import BotoCoreError, ClientError

from . import metrics
from .constants import (
    DEFAULT_CONTENT_TYPE,
    KEY_BASE_CWD,
    KEY_BASE_ROOT,
    MOCK_CLI_ENDPOINT_URL,
    OP_SYNC_DIRECTORY,
    OP_UPLOAD_FILE,
)
from .logging import log_operation_event
from .models import FileUploadTask, OperationResult, PublishReport
from .services.aws.models import ClientConfig
from .services.s3.base import S3Provider
from .tracing import set_span_status, trace_span
from .utils.errors import UploadError, describe_error, sanitize_error_message
from .walker import list_files

logger = logging.getLogger(__name__)


def guess_content_type(path: Path) -> str:
    """Guess an object's Content-Type from its file name."""
    content_type, _ = mimetypes.guess_type(path.name)
    return content_type or DEFAULT_CONTENT_TYPE


def build_upload_tasks(root: str | os.PathLike[str], key_base: str = KEY_BASE_ROOT) -> list[FileUploadTask]:
    """Walk a build directory and derive an object key for every file.

    Args:
        root: Build directory
        key_base: "root" to key objects relative to the build directory,
            "cwd" to key them relative to the process working directory

    Returns:
        One task per regular file, in walk order

    Raises:
        FilesystemError: If the directory cannot be listed
    """
    root_path = Path(root).absolute()
    base = Path.cwd() if key_base == KEY_BASE_CWD else root_path

    tasks = []
    for path in list_files(root_path):
        # Keys are used verbatim apart from the separator
        key = Path(os.path.relpath(path, base)).as_posix()
        tasks.append(FileUploadTask(absolute_path=path, relative_key=key))
    return tasks


class SitePublisher:
    """Uploads every file of a build directory to a bucket, one at a time."""

    def __init__(self, provider: S3Provider) -> None:
        self.provider = provider

    def upload(self, task: FileUploadTask, bucket: str) -> OperationResult:
        """Upload one file, turning any failure into an UploadError result."""
        with trace_span(OP_UPLOAD_FILE, bucket=bucket, attributes={"object.key": task.relative_key}):
            try:
                self.provider.upload_file(
                    bucket,
                    task.relative_key,
                    task.absolute_path,
                    content_type=guess_content_type(task.absolute_path),
                )
            except (ClientError, BotoCoreError, OSError) as e:
                result = OperationResult.failure(
                    OP_UPLOAD_FILE,
                    bucket,
                    UploadError,
                    f"Error uploading {task.absolute_path}: {describe_error(e)}",
                    key=task.relative_key,
                    path=str(task.absolute_path),
                )
            else:
                result = OperationResult.success(
                    OP_UPLOAD_FILE,
                    bucket,
                    f"Successfully uploaded {task.absolute_path} to {bucket}/{task.relative_key}",
                    key=task.relative_key,
                    path=str(task.absolute_path),
                )
            set_span_status(result.ok, None if result.ok else result.message)

        metrics.object_uploads_total.labels(result="success" if result.ok else "failed").inc()
        log_operation_event(
            logger,
            operation=OP_UPLOAD_FILE,
            bucket=bucket,
            result="success" if result.ok else "failed",
            message=result.message,
            level=logging.INFO if result.ok else logging.ERROR,
            key=task.relative_key,
        )
        return result

    def publish(
        self,
        root: str | os.PathLike[str],
        bucket: str,
        key_base: str = KEY_BASE_ROOT,
    ) -> PublishReport:
        """Upload every regular file under ``root`` to ``bucket``.

        A failed upload is recorded and the loop moves on to the next file.
        There is no atomicity: a partial publish leaves old and new objects
        side by side.

        Raises:
            FilesystemError: If the build directory cannot be listed; nothing
                is uploaded in that case
        """
        tasks = build_upload_tasks(root, key_base)
        report = PublishReport(bucket=bucket, root=Path(root))
        logger.info(f"Publishing {len(tasks)} files from {root} to {bucket}")
        for task in tasks:
            report.results.append(self.upload(task, bucket))
        return report


def build_sync_command(
    root: str | os.PathLike[str],
    bucket: str,
    client_config: ClientConfig,
) -> list[str]:
    """Build the AWS CLI command that copies a directory into a bucket."""
    command = ["aws", "s3", "cp", str(root), f"s3://{bucket}/", "--recursive"]
    if client_config.endpoint_url:
        command.append(f"--endpoint-url={MOCK_CLI_ENDPOINT_URL}")
    return command


def _sync_environment(client_config: ClientConfig, base: Mapping[str, str]) -> dict[str, str]:
    env = dict(base)
    if client_config.credentials:
        env["AWS_ACCESS_KEY_ID"] = client_config.credentials.access_key_id
        env["AWS_SECRET_ACCESS_KEY"] = client_config.credentials.secret_access_key
        if client_config.credentials.session_token:
            env["AWS_SESSION_TOKEN"] = client_config.credentials.session_token
        else:
            env.pop("AWS_SESSION_TOKEN", None)
    if client_config.region:
        env["AWS_DEFAULT_REGION"] = client_config.region
    return env


def sync_directory(
    root: str | os.PathLike[str],
    bucket: str,
    client_config: ClientConfig,
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
) -> OperationResult:
    """Copy a whole directory to the bucket with the AWS CLI in one command.

    What gets copied is up to the CLI; every file is sent on each run.
    """
    if not Path(root).is_dir():
        return OperationResult.failure(OP_SYNC_DIRECTORY, bucket, UploadError, f"Not a directory: {root}")

    command = build_sync_command(root, bucket, client_config)
    executable = shutil.which(command[0]) or command[0]
    logger.info(f"Running {' '.join(command)}")

    with trace_span(OP_SYNC_DIRECTORY, bucket=bucket):
        try:
            completed = runner(
                [executable, *command[1:]],
                capture_output=True,
                text=True,
                env=_sync_environment(client_config, os.environ),
                check=False,
            )
        except OSError as e:
            result = OperationResult.failure(
                OP_SYNC_DIRECTORY, bucket, UploadError, f"Cannot run AWS CLI: {describe_error(e)}"
            )
        else:
            output = sanitize_error_message((completed.stdout or "").strip())
            if completed.returncode == 0:
                result = OperationResult.success(
                    OP_SYNC_DIRECTORY, bucket, f"Copied {root} to s3://{bucket}/", output=output
                )
            else:
                stderr = sanitize_error_message((completed.stderr or "").strip())
                result = OperationResult.failure(
                    OP_SYNC_DIRECTORY,
                    bucket,
                    UploadError,
                    f"AWS CLI exited with status {completed.returncode}: {stderr}",
                    output=output,
                    returncode=completed.returncode,
                )
        set_span_status(result.ok, None if result.ok else result.message)

    metrics.bucket_operations_total.labels(
        operation=OP_SYNC_DIRECTORY, result="success" if result.ok else "failed"
    ).inc()
    log_operation_event(
        logger,
        operation=OP_SYNC_DIRECTORY,
        bucket=bucket,
        result="success" if result.ok else "failed",
        message=result.message,
        level=logging.INFO if result.ok else logging.ERROR,
    )
    return result
