from __future__ import annotations

from urllib.parse import parse_qsl, urlsplit

import pytest

from conftest import ENDPOINT
from hfsubset.adapters.endpoint_url import build_subset_url, parse_endpoint
from hfsubset.core.domain import SubsetRequest
from hfsubset.core.errors import InvalidEndpoint


def _expected(query: str) -> str:
    return f"{ENDPOINT}/subset{query}"


@pytest.mark.parametrize(
    "identifier,id_type,query",
    [
        ("101", "comid", "?identifier=101&identifier_type=comid"),
        (
            "nwissite:USGS-12345678",
            "nldi",
            "?identifier=nwissite%3AUSGS-12345678&identifier_type=nldi",
        ),
        (
            "123.456,-98.76543",
            "xy",
            "?identifier=123.456%2C-98.76543&identifier_type=xy",
        ),
    ],
)
def test_single_identifier_url(identifier, id_type, query):
    request = SubsetRequest(identifiers=[identifier], identifier_type=id_type)

    assert str(build_subset_url(ENDPOINT, request)) == _expected(query)


def test_one_identifier_parameter_per_identifier_in_order():
    ids = ["wb-3", "wb-1", "wb-2", "wb-1"]
    request = SubsetRequest(identifiers=ids, identifier_type="id")

    url = build_subset_url(ENDPOINT, request)
    pairs = parse_qsl(urlsplit(str(url)).query)

    assert [v for k, v in pairs if k == "identifier"] == ids


def test_all_parameters_in_order():
    request = SubsetRequest(
        identifiers=["a", "b"],
        identifier_type="hl_uri",
        layers=["divides", "nexus"],
        subset_type="reference",
        weights=["w1"],
        version="2.2",
    )

    assert str(build_subset_url(ENDPOINT, request)) == _expected(
        "?identifier=a&identifier=b&identifier_type=hl_uri"
        "&layer=divides&layer=nexus&subset_type=reference&weights=w1&version=2.2"
    )


def test_spaces_are_percent_encoded():
    request = SubsetRequest(identifiers=["Gages 06752260"], identifier_type="hl_uri")

    url = str(build_subset_url(ENDPOINT, request))

    assert "identifier=Gages%2006752260" in url
    assert "+" not in url


@pytest.mark.parametrize(
    "endpoint,prefix",
    [
        (ENDPOINT + "/", ENDPOINT + "/subset"),
        ("https://example.org/api", "https://example.org/api/subset"),
        ("https://example.org/api/", "https://example.org/api/subset"),
    ],
)
def test_subset_path_is_appended(endpoint, prefix):
    request = SubsetRequest(identifiers=["101"], identifier_type="comid")

    url = str(build_subset_url(endpoint, request))

    assert url == prefix + "?identifier=101&identifier_type=comid"


@pytest.mark.parametrize("endpoint", ["", "   ", "not a url", "ftp://example.org", "localhost:3101"])
def test_malformed_endpoint_is_rejected(endpoint):
    request = SubsetRequest(identifiers=["101"])

    with pytest.raises(InvalidEndpoint):
        build_subset_url(endpoint, request)


def test_parse_endpoint_accepts_http_and_https():
    assert parse_endpoint("http://localhost:3101").host == "localhost"
    assert parse_endpoint(" https://example.org ").scheme == "https"


@pytest.mark.parametrize("endpoint", ["http://example.org/api?token=abc", "http://example.org/api#top"])
def test_endpoint_with_query_or_fragment_is_rejected(endpoint):
    with pytest.raises(InvalidEndpoint, match="query strings and fragments"):
        parse_endpoint(endpoint)
