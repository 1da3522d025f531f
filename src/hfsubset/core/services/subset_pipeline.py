"""Subset request orchestration.

One sequential flow per invocation: verify -> build URL -> request -> write.
The CLI hands in an explicit `RunOptions` instead of process-wide flags, which
keeps this module usable from tests and other entry points. Any error aborts
the whole run; nothing is retried.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

import httpx

from hfsubset.adapters.fetchers import get_fetcher
from hfsubset.adapters.http_client import build_client
from hfsubset.adapters.verifier import verify_service
from hfsubset.core.config import AppSettings
from hfsubset.core.domain.identifiers import WireProtocol
from hfsubset.core.domain.models import SubsetRequest

logger = logging.getLogger(__name__)


@dataclass
class RunOptions:
    """Switches that control one pipeline run."""

    verify: bool = True
    dry_run: bool = False
    quiet: bool = False
    debug: bool = False
    protocol: WireProtocol = WireProtocol.REST

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "RunOptions":
        return cls(verify=settings.verify, protocol=settings.protocol)

    def log_level(self) -> int | None:
        """Level for the `hfsubset` logger during the run; None keeps the current one."""

        if self.quiet:
            return logging.ERROR
        if self.debug:
            return logging.DEBUG
        return None


@dataclass
class PipelineResult:
    """Output of a pipeline invocation."""

    url: str
    output: Path | None
    bytes_written: int = 0
    api_version: str | None = None
    dry_run: bool = False


@contextmanager
def _scoped_log_level(level: int | None) -> Iterator[None]:
    package_logger = logging.getLogger("hfsubset")
    previous = package_logger.level
    if level is not None:
        package_logger.setLevel(level)
    try:
        yield
    finally:
        package_logger.setLevel(previous)


def run_subset(
    *,
    settings: AppSettings,
    request: SubsetRequest,
    options: RunOptions | None = None,
    client: httpx.Client | None = None,
) -> PipelineResult:
    """Request the subset described by `request` and write it to disk.

    A dry run only resolves the request URL: no HTTP call, no file I/O.
    When `client` is omitted one is built from `settings` and closed here.
    `options.quiet` and `options.debug` set the `hfsubset` log level for the
    duration of the run.
    """

    options = options or RunOptions.from_settings(settings)
    with _scoped_log_level(options.log_level()):
        return _run(settings, request, options, client)


def _run(
    settings: AppSettings,
    request: SubsetRequest,
    options: RunOptions,
    client: httpx.Client | None,
) -> PipelineResult:
    logger.debug("endpoint %s, options %s", settings.endpoint, options)
    fetcher = get_fetcher(options.protocol, settings.endpoint)

    if options.dry_run:
        url = fetcher.request_url(request)
        logger.info("dry run, would request %s", url)
        return PipelineResult(url=url, output=None, dry_run=True)

    owns_client = client is None
    http = client if client is not None else build_client(settings)
    try:
        api_version: str | None = None
        if options.verify:
            api_version = verify_service(settings.endpoint, http)
            logger.info("verified %s (api version %s)", settings.endpoint, api_version)

        transfer = fetcher.fetch(request, http)
    finally:
        if owns_client:
            http.close()

    logger.info("wrote %d bytes to %s", transfer.bytes_written, transfer.output)
    return PipelineResult(
        url=transfer.url,
        output=transfer.output,
        bytes_written=transfer.bytes_written,
        api_version=api_version,
    )
