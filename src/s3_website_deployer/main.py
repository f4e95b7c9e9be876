"""Command line entry point for the S3 Website Deployer."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from . import __version__
from . import logging as structured_logging
from . import metrics
from .builders.client import create_provider, resolve
from .config import KEY_BASES, OUTPUT_FORMATS, DeployerSettings
from .constants import MODE_LIVE, MODE_MOCK, TOOL_NAME
from .provisioner import BucketProvisioner
from .publisher import SitePublisher, sync_directory
from .reporter import StatusReporter, render_urls
from .services.aws.models import ClientConfig
from .services.s3.base import S3Provider
from .tracing import initialize_tracing, shutdown_tracing
from .utils.errors import ConfigError, FilesystemError, sanitize_exception

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog=TOOL_NAME,
        description="Provision an S3 bucket for static website hosting and publish a build directory to it.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--bucket", dest="bucket_name", help="target bucket name (env: DEPLOYER_BUCKET_NAME)")
    parser.add_argument("--mode", choices=[MODE_LIVE, MODE_MOCK], help="live AWS or local emulator (env: DEPLOYER_MODE)")
    parser.add_argument("--region", help="bucket region (env: DEPLOYER_REGION)")
    parser.add_argument("--output", choices=OUTPUT_FORMATS, help="report format (env: DEPLOYER_OUTPUT)")
    parser.add_argument("--log-level", help="logging level (env: DEPLOYER_LOG_LEVEL)")
    parser.add_argument("--pushgateway", dest="pushgateway_url", help="Prometheus Pushgateway URL for run metrics")

    upload_args = argparse.ArgumentParser(add_help=False)
    upload_args.add_argument("--build-dir", help="local build directory (env: DEPLOYER_BUILD_DIR)")
    upload_args.add_argument("--key-base", choices=KEY_BASES, help="derive object keys relative to the build dir or the cwd")
    upload_args.add_argument("--bulk", action="store_true", help="copy with the AWS CLI instead of per-file uploads")

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("deploy", parents=[upload_args], help="provision the bucket, publish files and print URLs")
    subparsers.add_parser("provision", help="create and configure the bucket for website hosting")
    subparsers.add_parser("publish", parents=[upload_args], help="upload the build directory")

    website = subparsers.add_parser("website", help="inspect or remove the website configuration")
    website.add_argument("action", choices=["get", "disable"])

    subparsers.add_parser("urls", help="print the website URLs")
    return parser


def load_settings(args: argparse.Namespace) -> DeployerSettings:
    """Load settings from the environment and apply command line overrides."""
    return DeployerSettings.from_env().override(
        bucket_name=args.bucket_name,
        mode=args.mode,
        region=args.region,
        output=args.output,
        log_level=args.log_level,
        pushgateway_url=args.pushgateway_url,
        build_dir=getattr(args, "build_dir", None),
        key_base=getattr(args, "key_base", None),
    )


def run(args: argparse.Namespace, settings: DeployerSettings, reporter: StatusReporter) -> bool:
    """Execute a command and report its outcome.

    Returns:
        True if every operation succeeded
    """
    target = settings.target()
    client_config = resolve(target.mode, target.region)
    url_region = client_config.region or target.region

    if args.command == "urls":
        reporter.urls(render_urls(target.bucket_name, url_region))
        return True

    logger.info(f"Using {target.mode.value} mode for bucket {target.bucket_name}")
    provider = create_provider(client_config)
    provisioner = BucketProvisioner(provider, region=client_config.region)
    ok = True

    if args.command in ("deploy", "provision"):
        results = provisioner.provision(target.bucket_name)
        reporter.results(results)
        ok = all(r.ok for r in results)

    elif args.command == "website":
        if args.action == "get":
            result = provisioner.get_website_config(target.bucket_name)
        else:
            result = provisioner.disable_website_hosting(target.bucket_name)
        reporter.result(result)
        ok = result.ok

    if args.command in ("deploy", "publish"):
        ok = publish(args, settings, client_config, provider, reporter) and ok

    if args.command == "deploy":
        reporter.urls(render_urls(target.bucket_name, url_region))
    return ok


def publish(
    args: argparse.Namespace,
    settings: DeployerSettings,
    client_config: ClientConfig,
    provider: S3Provider,
    reporter: StatusReporter,
) -> bool:
    """Upload the build directory per file, or in bulk with the AWS CLI."""
    bucket = settings.bucket_name
    if args.bulk:
        result = sync_directory(settings.build_dir, bucket, client_config)
        reporter.result(result)
        return result.ok

    try:
        report = SitePublisher(provider).publish(settings.build_dir, bucket, key_base=settings.key_base)
    except FilesystemError as e:
        logger.error(f"Cannot publish {settings.build_dir}: {e}")
        reporter.error(FilesystemError.kind, str(e))
        return False
    reporter.publish(report)
    return report.ok


def main(argv: Sequence[str] | None = None) -> int:
    """Run the deployer CLI and return the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args)
    except ConfigError as e:
        parser.error(str(e))

    structured_logging.setup_structured_logging(settings.log_level)
    initialize_tracing()
    reporter = StatusReporter(settings.output)

    try:
        ok = run(args, settings, reporter)
    finally:
        if settings.pushgateway_url:
            try:
                metrics.push_metrics(settings.pushgateway_url)
            except OSError as e:
                logger.warning(f"Failed to push metrics to {settings.pushgateway_url}: {sanitize_exception(e)}")
        shutdown_tracing()

    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
