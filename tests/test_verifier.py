from __future__ import annotations

import httpx
import pytest

from conftest import ENDPOINT
from hfsubset.adapters.verifier import API_VERSION_HEADER, LEGACY_API_VERSION, verify_service
from hfsubset.core.errors import InvalidEndpoint, VerificationFailed


def test_version_header_is_returned(make_client):
    client, recorder = make_client(
        lambda request: httpx.Response(200, headers={API_VERSION_HEADER: "1.2.0"})
    )

    assert verify_service(ENDPOINT, client) == "1.2.0"
    assert recorder.methods == ["HEAD"]
    assert recorder.requests[0].url.host == "1.2.3.4"


def test_404_counts_as_service_present(make_client):
    client, _ = make_client(lambda request: httpx.Response(404))

    assert verify_service(ENDPOINT, client) == LEGACY_API_VERSION


def test_missing_header_defaults_to_legacy_version(make_client):
    client, _ = make_client(lambda request: httpx.Response(200))

    assert verify_service(ENDPOINT, client) == "0.1.0-alpha"


@pytest.mark.parametrize("status", [500, 502, 503, 401])
def test_other_statuses_fail(make_client, status):
    client, _ = make_client(lambda request: httpx.Response(status))

    with pytest.raises(VerificationFailed, match=str(status)):
        verify_service(ENDPOINT, client)


def test_transport_error_fails(make_client):
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client, _ = make_client(refuse)

    with pytest.raises(VerificationFailed, match="connection refused"):
        verify_service(ENDPOINT, client)


def test_invalid_endpoint_fails_before_network(make_client):
    client, recorder = make_client(lambda request: httpx.Response(200))

    with pytest.raises(InvalidEndpoint):
        verify_service("not a url", client)
    assert recorder.requests == []
