"""Subset fetcher: REST.

`GET {endpoint}/subset?identifier=...` answered with the raw GeoPackage. The
body is streamed to disk only after a 200; any other status leaves the output
path untouched.
"""

from __future__ import annotations

import logging

import httpx

from hfsubset.adapters.endpoint_url import build_subset_url
from hfsubset.adapters.http_client import describe_status
from hfsubset.adapters.output_writer import write_chunks
from hfsubset.core.domain.models import SubsetRequest, TransferResult
from hfsubset.core.errors import RequestTimeout, SubsetRequestFailed
from hfsubset.core.interfaces.fetcher import SubsetFetcher

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1 << 20


class RestSubsetFetcher(SubsetFetcher):
    """Requests a subset with query parameters and streams the response."""

    def __init__(self, endpoint: str) -> None:
        self._endpoint = endpoint

    def request_url(self, request: SubsetRequest) -> str:
        return str(build_subset_url(self._endpoint, request))

    def fetch(self, request: SubsetRequest, client: httpx.Client) -> TransferResult:
        url = self.request_url(request)
        logger.info("sending request %s", url)

        try:
            with client.stream("GET", url) as response:
                logger.debug("response headers: %s", dict(response.headers))
                if response.status_code != 200:
                    raise SubsetRequestFailed(
                        f"subset request failed: {describe_status(response)}",
                        status_code=response.status_code,
                    )

                logger.info("writing response to %s", request.output)
                written = write_chunks(
                    response.iter_bytes(chunk_size=CHUNK_SIZE), request.output
                )
        except httpx.TimeoutException as exc:
            raise RequestTimeout(f"subset request timed out: {exc}") from exc
        except httpx.HTTPError as exc:
            raise SubsetRequestFailed(f"subset request failed: {exc}") from exc

        return TransferResult(
            url=url,
            output=request.output,
            bytes_received=written,
            bytes_written=written,
        )
