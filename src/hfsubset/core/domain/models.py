"""Domain models (Pydantic v2).

- `SubsetRequest` is validated and normalized once, then frozen.
- These models describe *what* is requested, not *how* it is fetched.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from hfsubset.core.domain.identifiers import IdentifierType

CORE_LAYERS: tuple[str, ...] = (
    "divides",
    "nexus",
    "flowpaths",
    "network",
    "hydrolocations",
)

ALL_LAYERS: tuple[str, ...] = CORE_LAYERS + (
    "lakes",
    "reference_flowline",
    "reference_catchment",
    "reference_flowpaths",
    "reference_divides",
)

_LAYER_ALIASES: dict[str, tuple[str, ...]] = {
    "core": CORE_LAYERS,
    "all": ALL_LAYERS,
}

DEFAULT_OUTPUT = Path("hydrofabric.gpkg")


def _split_values(value: Any) -> list[str]:
    """Flatten a string or a sequence of comma-delimited strings."""

    if isinstance(value, str):
        value = [value]
    out: list[str] = []
    for item in value:
        for part in str(item).split(","):
            part = part.strip()
            if part:
                out.append(part)
    return out


def _dedupe(values: Iterable[str]) -> tuple[str, ...]:
    seen: set[str] = set()
    out: list[str] = []
    for v in values:
        if v in seen:
            continue
        seen.add(v)
        out.append(v)
    return tuple(out)


class SubsetRequest(BaseModel):
    """A hydrofabric subset request.

    Identifiers keep their input order and may repeat. Layers and weights are
    sets: they are deduplicated keeping the first occurrence.
    """

    model_config = ConfigDict(frozen=True)

    identifiers: tuple[str, ...] = Field(
        ...,
        min_length=1,
        description="Subsetting keys, trimmed once; empty values are dropped.",
    )
    identifier_type: IdentifierType = Field(
        default=IdentifierType.HF,
        description="How the service interprets `identifiers`.",
    )
    layers: tuple[str, ...] | None = Field(
        default=None,
        description="Layers to return. None leaves the service default (core set).",
    )
    weights: tuple[str, ...] | None = Field(
        default=None,
        description="Optional weight tables to include.",
    )
    subset_type: str | None = Field(
        default=None,
        description="Hydrofabric type; only 'reference' is meaningful.",
    )
    version: str | None = Field(
        default=None,
        description="Hydrofabric version (e.g. '2.2' or 'pre-release').",
    )
    output: Path = Field(
        default=DEFAULT_OUTPUT,
        description="Destination file; overwritten if it exists.",
    )

    @field_validator("identifiers", mode="before")
    @classmethod
    def _normalize_identifiers(cls, value: Any) -> tuple[str, ...]:
        if value is None:
            return ()
        if isinstance(value, (str, int)):
            value = [value]
        return tuple(str(v).strip() for v in value if str(v).strip())

    @field_validator("identifier_type", mode="before")
    @classmethod
    def _parse_identifier_type(cls, value: Any) -> IdentifierType:
        return IdentifierType.parse(value)

    @field_validator("layers", mode="before")
    @classmethod
    def _expand_layers(cls, value: Any) -> tuple[str, ...] | None:
        if value is None:
            return None
        expanded: list[str] = []
        for layer in _split_values(value):
            expanded.extend(_LAYER_ALIASES.get(layer.lower(), (layer,)))
        return _dedupe(expanded) or None

    @field_validator("weights", mode="before")
    @classmethod
    def _normalize_weights(cls, value: Any) -> tuple[str, ...] | None:
        if value is None:
            return None
        return _dedupe(_split_values(value)) or None

    @field_validator("subset_type", "version", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> str | None:
        if value is None:
            return None
        value = str(value).strip()
        return value or None


@dataclass(frozen=True)
class SubsetResponse:
    """Decoded subset payload held in memory until it is written."""

    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class TransferResult:
    """Outcome of one fetch: where the payload went and how much of it."""

    url: str
    output: Path
    bytes_received: int
    bytes_written: int
