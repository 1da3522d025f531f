"""Domain models and entities.

- Pure, strict data structures (Pydantic v2 and frozen dataclasses).
- The domain knows nothing about HTTP or the CLI.
"""

from hfsubset.core.domain.identifiers import IdentifierType, WireProtocol
from hfsubset.core.domain.models import (
    ALL_LAYERS,
    CORE_LAYERS,
    SubsetRequest,
    SubsetResponse,
    TransferResult,
)

__all__ = [
    "ALL_LAYERS",
    "CORE_LAYERS",
    "IdentifierType",
    "SubsetRequest",
    "SubsetResponse",
    "TransferResult",
    "WireProtocol",
]
