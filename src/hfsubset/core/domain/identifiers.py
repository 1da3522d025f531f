"""Identifier types and wire protocols understood by hfsubset.

Both enums live in the domain layer so the CLI, the request model and the
fetchers share one closed set of values.
"""

from __future__ import annotations

from enum import Enum

from hfsubset.core.errors import InvalidIdentifierType


class IdentifierType(str, Enum):
    """Classification of a user-supplied subsetting key."""

    ID = "id"
    HF = "hf"
    COMID = "comid"
    HL = "hl"
    HL_URI = "hl_uri"
    POI = "poi"
    NLDI = "nldi"
    NLDI_FEATURE = "nldi_feature"
    XY = "xy"

    @classmethod
    def default(cls) -> "IdentifierType":
        """Return the identifier type used when none is given."""

        return cls.HF

    @classmethod
    def parse(cls, value: "str | IdentifierType") -> "IdentifierType":
        """Parse a user value, rejecting anything outside the closed set."""

        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(member.value for member in cls)
            raise InvalidIdentifierType(
                f"type {value!r} not supported; only one of: {choices}"
            ) from None


class WireProtocol(str, Enum):
    """How a subset is requested from the service."""

    # GET {endpoint}/subset?identifier=...
    REST = "rest"
    # POST of a JSON document to a lambda invocation path, base64 response
    LAMBDA = "lambda"
