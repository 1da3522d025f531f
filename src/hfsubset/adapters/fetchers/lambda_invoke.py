"""Subset fetcher: legacy lambda invocation.

Wire contract:
- POST a JSON document (`layers`, one identifier key, `version`) to
  `{endpoint}/2015-03-31/functions/function/invocations`.
- The body is a JSON string holding the base64 GeoPackage. Some deployments
  wrap it in one extra pair of quotes, which is stripped before decoding.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from typing import Any

import httpx

from hfsubset.adapters.endpoint_url import join_path, parse_endpoint
from hfsubset.adapters.http_client import describe_status
from hfsubset.adapters.output_writer import write_payload
from hfsubset.core.domain.identifiers import IdentifierType
from hfsubset.core.domain.models import (
    CORE_LAYERS,
    SubsetRequest,
    SubsetResponse,
    TransferResult,
)
from hfsubset.core.errors import (
    InvalidIdentifier,
    InvalidIdentifierType,
    RequestTimeout,
    ResponseDecodeError,
    SubsetRequestFailed,
)
from hfsubset.core.interfaces.fetcher import SubsetFetcher

logger = logging.getLogger(__name__)

INVOCATION_PATH = "2015-03-31/functions/function/invocations"

# The lambda only understands these keys.
_PAYLOAD_KEYS: dict[IdentifierType, str] = {
    IdentifierType.ID: "id",
    IdentifierType.HL_URI: "hl_uri",
    IdentifierType.COMID: "comid",
    IdentifierType.NLDI_FEATURE: "nldi_feature",
    IdentifierType.XY: "xy",
}


def _compact_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"))


def _encode_nldi_feature(identifier: str) -> str:
    source, sep, feature_id = identifier.partition(":")
    if not sep or not source or not feature_id:
        raise InvalidIdentifier(
            f"nldi_feature identifier {identifier!r} must look like 'source:id'"
        )
    return _compact_json({"featureSource": source, "featureId": feature_id})


def _encode_xy(identifier: str) -> str:
    parts = identifier.split(",")
    if len(parts) != 2:
        raise InvalidIdentifier(f"xy identifier {identifier!r} must look like 'x,y'")
    try:
        x, y = (float(p) for p in parts)
    except ValueError:
        raise InvalidIdentifier(
            f"xy identifier {identifier!r} must hold two numbers"
        ) from None
    return _compact_json({"X": x, "Y": y})


def build_lambda_payload(request: SubsetRequest) -> dict[str, Any]:
    """JSON document sent to the lambda for `request`."""

    key = _PAYLOAD_KEYS.get(request.identifier_type)
    if key is None:
        choices = ", ".join(k.value for k in _PAYLOAD_KEYS)
        raise InvalidIdentifierType(
            f"type {request.identifier_type.value} not supported; only one of: {choices}"
        )

    identifiers = list(request.identifiers)
    if request.identifier_type is IdentifierType.NLDI_FEATURE:
        identifiers = [_encode_nldi_feature(i) for i in identifiers]
    elif request.identifier_type is IdentifierType.XY:
        identifiers = [_encode_xy(i) for i in identifiers]

    payload: dict[str, Any] = {
        "layers": list(request.layers or CORE_LAYERS),
        key: identifiers,
    }
    if request.version is not None:
        payload["version"] = request.version
    return payload


def decode_lambda_payload(body: bytes) -> SubsetResponse:
    """Decode a lambda response body into the raw GeoPackage bytes."""

    raw = body.strip()
    if len(raw) >= 2 and raw[:1] == b'"' and raw[-1:] == b'"':
        raw = raw[1:-1]
    # Line breaks inside the encoded text are ignored, as in MIME base64.
    raw = raw.replace(b"\r", b"").replace(b"\n", b"")
    if not raw:
        raise ResponseDecodeError("empty response body")

    try:
        data = base64.b64decode(raw, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ResponseDecodeError(f"malformed base64 response: {exc}") from exc
    return SubsetResponse(data=data)


class LambdaSubsetFetcher(SubsetFetcher):
    """Requests a subset from the lambda-style invocation endpoint."""

    def __init__(self, endpoint: str) -> None:
        self._endpoint = endpoint

    def request_url(self, request: SubsetRequest) -> str:
        return str(join_path(parse_endpoint(self._endpoint), INVOCATION_PATH))

    def fetch(self, request: SubsetRequest, client: httpx.Client) -> TransferResult:
        url = self.request_url(request)
        payload = build_lambda_payload(request)
        logger.debug("lambda payload: %s", payload)

        logger.info("[1/4] waiting for response from %s", url)
        try:
            response = client.post(url, json=payload)
        except httpx.TimeoutException as exc:
            raise RequestTimeout(f"subset request timed out: {exc}") from exc
        except httpx.HTTPError as exc:
            raise SubsetRequestFailed(f"subset request failed: {exc}") from exc

        if response.status_code != 200:
            raise SubsetRequestFailed(
                f"subset request failed: {describe_status(response)}",
                status_code=response.status_code,
            )

        logger.info("[2/4] reading hydrofabric subset")
        body = response.content

        logger.info("[3/4] parsing base64 response")
        subset = decode_lambda_payload(body)

        logger.info("[4/4] writing to %s", request.output)
        written = write_payload(subset, request.output)

        return TransferResult(
            url=url,
            output=request.output,
            bytes_received=subset.size,
            bytes_written=written,
        )
