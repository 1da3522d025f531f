"""Subset fetchers (one per wire protocol).

Each module implements `hfsubset.core.interfaces.fetcher.SubsetFetcher`.
"""

from __future__ import annotations

from hfsubset.adapters.fetchers.lambda_invoke import LambdaSubsetFetcher
from hfsubset.adapters.fetchers.rest import RestSubsetFetcher
from hfsubset.core.domain.identifiers import WireProtocol
from hfsubset.core.interfaces.fetcher import SubsetFetcher


def get_fetcher(protocol: WireProtocol | str, endpoint: str) -> SubsetFetcher:
    """Return the fetcher implementation for `protocol`."""

    protocol = WireProtocol(protocol)
    if protocol is WireProtocol.REST:
        return RestSubsetFetcher(endpoint)
    if protocol is WireProtocol.LAMBDA:
        return LambdaSubsetFetcher(endpoint)
    raise ValueError(f"unsupported protocol: {protocol}")


__all__ = [
    "LambdaSubsetFetcher",
    "RestSubsetFetcher",
    "get_fetcher",
]
