"""Contract for subset fetchers.

Each wire protocol (REST GET, legacy lambda POST) is one implementation, so
the pipeline selects a strategy instead of branching inside the transfer.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import httpx

from hfsubset.core.domain.models import SubsetRequest, TransferResult


@runtime_checkable
class SubsetFetcher(Protocol):
    """Minimal contract for a subset transfer strategy.

    Design rules:
    - `request_url` performs no I/O (used by dry runs and logging).
    - `fetch` writes the payload to `request.output` or raises an
      `HfsubsetError`; it never reports partial success.
    """

    def request_url(self, request: SubsetRequest) -> str:
        """URL this strategy would contact for `request`."""

        ...

    def fetch(self, request: SubsetRequest, client: httpx.Client) -> TransferResult:
        """Request the subset and persist it to `request.output`."""

        ...
