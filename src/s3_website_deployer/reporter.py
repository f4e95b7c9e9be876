"""Console presentation of deployment results and website URLs."""

from __future__ import annotations

import json
import sys
from typing import Any, NamedTuple, TextIO

from .constants import WEBSITE_URL_DASH, WEBSITE_URL_DOT
from .models import OperationResult, PublishReport


class SiteUrls(NamedTuple):
    """Both historical static website endpoint forms."""

    dash_style: str
    dot_style: str


def render_urls(bucket_name: str, region: str) -> SiteUrls:
    """Build the website endpoint URLs for a bucket.

    No request is made; the URLs are not checked for reachability.
    """
    return SiteUrls(
        dash_style=WEBSITE_URL_DASH.format(bucket=bucket_name, region=region),
        dot_style=WEBSITE_URL_DOT.format(bucket=bucket_name, region=region),
    )


class StatusReporter:
    """Writes results to the operator as text lines or JSON lines."""

    def __init__(self, output: str = "text", stream: TextIO | None = None) -> None:
        self.output = output
        self.stream = stream or sys.stdout

    def _write(self, line: str) -> None:
        print(line, file=self.stream)

    def _emit(self, kind: str, payload: dict[str, Any]) -> None:
        self._write(json.dumps({"type": kind, **payload}, default=str))

    def result(self, result: OperationResult) -> None:
        if self.output == "json":
            self._emit("operation", result.to_dict())
            return
        if result.ok:
            self._write(f"[{result.operation}] OK: {result.message}")
        else:
            self._write(f"[{result.operation}] {result.error_kind}: {result.message}")

    def results(self, results: list[OperationResult]) -> None:
        for result in results:
            self.result(result)

    def publish(self, report: PublishReport) -> None:
        if self.output == "json":
            self._emit("publish", report.to_dict())
            return
        for result in report.results:
            self.result(result)
        self._write(f"Uploaded {report.uploaded} files to {report.bucket}, {report.failed} failed")

    def urls(self, urls: SiteUrls) -> None:
        if self.output == "json":
            self._emit("urls", urls._asdict())
            return
        self._write(urls.dash_style)
        self._write(urls.dot_style)

    def error(self, kind: str, message: str) -> None:
        if self.output == "json":
            self._emit("error", {"error_kind": kind, "message": message})
            return
        self._write(f"{kind}: {message}")
