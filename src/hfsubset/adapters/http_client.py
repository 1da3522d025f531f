"""httpx wrapper.

- Standardizes timeout, client identity and redirects for every request.
- Accepts a transport so tests can plug in `httpx.MockTransport`.
"""

from __future__ import annotations

import httpx

from hfsubset.core.config import AppSettings


def build_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Create an `httpx.Client` carrying the hfsubset defaults."""

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "*/*",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


def describe_status(response: httpx.Response) -> str:
    """Status text in the form `404 Not Found`."""

    reason = response.reason_phrase
    return f"{response.status_code} {reason}".strip()
