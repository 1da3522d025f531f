"""Subset URL construction.

Pure functions: no I/O, deterministic output. Query values use RFC 3986
percent-encoding (`%20` for spaces, `%3A` for `:`, `%2C` for `,`).
"""

from __future__ import annotations

from urllib.parse import quote, urlencode

import httpx

from hfsubset.core.domain.models import SubsetRequest
from hfsubset.core.errors import InvalidEndpoint

SUBSET_PATH = "subset"


def parse_endpoint(endpoint: str) -> httpx.URL:
    """Validate a base endpoint, raising `InvalidEndpoint` when unusable."""

    value = (endpoint or "").strip()
    if not value:
        raise InvalidEndpoint(endpoint, "empty URL")
    try:
        url = httpx.URL(value)
    except httpx.InvalidURL as exc:
        raise InvalidEndpoint(endpoint, str(exc)) from exc

    if url.scheme not in ("http", "https"):
        raise InvalidEndpoint(endpoint, "scheme must be http or https")
    if not url.host:
        raise InvalidEndpoint(endpoint, "missing host")
    if url.query or url.fragment:
        raise InvalidEndpoint(endpoint, "query strings and fragments are not supported")
    return url


def join_path(base: httpx.URL, *segments: str) -> httpx.URL:
    """Append path segments to the path of `base`."""

    path = base.path.rstrip("/")
    for segment in segments:
        path += "/" + segment.strip("/")
    return base.copy_with(path=path)


def subset_query_params(request: SubsetRequest) -> list[tuple[str, str]]:
    """Query parameters for `request`, in the order they are added."""

    params: list[tuple[str, str]] = [("identifier", i) for i in request.identifiers]
    params.append(("identifier_type", request.identifier_type.value))

    if request.layers:
        params.extend(("layer", layer) for layer in request.layers)
    if request.subset_type is not None:
        params.append(("subset_type", request.subset_type))
    if request.weights:
        params.extend(("weights", weight) for weight in request.weights)
    if request.version is not None:
        params.append(("version", request.version))
    return params


def build_subset_url(endpoint: str, request: SubsetRequest) -> httpx.URL:
    """Build `<endpoint>/subset?identifier=...` for `request`."""

    base = parse_endpoint(endpoint)
    query = urlencode(subset_query_params(request), quote_via=quote)
    return join_path(base, SUBSET_PATH).copy_with(query=query.encode("ascii"))
