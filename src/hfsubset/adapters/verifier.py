"""HEAD preflight against the hfsubset service.

- 200 or 404 on the bare endpoint means the service is there (the root path
  does not have to resolve to a resource).
- The advertised API version comes from `X-HFSUBSET-API-VERSION`; services
  older than that header report `0.1.0-alpha`.
"""

from __future__ import annotations

import logging

import httpx

from hfsubset.adapters.endpoint_url import parse_endpoint
from hfsubset.adapters.http_client import describe_status
from hfsubset.core.errors import VerificationFailed

API_VERSION_HEADER = "X-HFSUBSET-API-VERSION"
LEGACY_API_VERSION = "0.1.0-alpha"

_SERVICE_PRESENT = (200, 404)

logger = logging.getLogger(__name__)


def verify_service(endpoint: str, client: httpx.Client) -> str:
    """Confirm the service answers at `endpoint` and return its API version."""

    url = parse_endpoint(endpoint)
    logger.debug("verifying endpoint %s", url)

    try:
        response = client.head(url)
    except httpx.HTTPError as exc:
        raise VerificationFailed(f"failed to reach {url}: {exc}") from exc

    if response.status_code not in _SERVICE_PRESENT:
        raise VerificationFailed(
            f"failed to verify {url}: {describe_status(response)}"
        )

    version = response.headers.get(API_VERSION_HEADER) or LEGACY_API_VERSION
    logger.debug("service at %s reports api version %s", url, version)
    return version
