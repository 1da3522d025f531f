"""Configuration of hfsubset.

- Environment variables (pydantic-settings) are read here, not in the CLI.
- `HFSUBSET_ENDPOINT`, `HFSUBSET_PROTOCOL` and `HFSUBSET_VERIFY` can also be
  saved to the per-user `.env` with `save_user_settings`.
"""

from __future__ import annotations

from pathlib import Path

import typer
from dotenv import set_key
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from hfsubset import __version__
from hfsubset.adapters.endpoint_url import parse_endpoint
from hfsubset.core.domain.identifiers import WireProtocol

APP_NAME = "hfsubset"
DEFAULT_ENDPOINT = "http://localhost:3101"


def get_user_env_file() -> Path:
    """Per-user `.env`, inside the platform's application config directory."""

    return Path(typer.get_app_dir(APP_NAME)) / ".env"


def save_user_settings(
    *,
    endpoint: str | None = None,
    protocol: WireProtocol | str | None = None,
    verify: bool | None = None,
) -> Path:
    """Validate and store service settings in the per-user `.env`.

    Only the given values are written; keys already in the file are kept.
    Raises `InvalidEndpoint` or `ValueError` before anything is written.
    """

    values: dict[str, str] = {}
    if endpoint is not None:
        endpoint = endpoint.strip()
        parse_endpoint(endpoint)
        values["HFSUBSET_ENDPOINT"] = endpoint
    if protocol is not None:
        values["HFSUBSET_PROTOCOL"] = WireProtocol(protocol.strip().lower()).value
    if verify is not None:
        values["HFSUBSET_VERIFY"] = "true" if verify else "false"

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)
    env_path.touch(exist_ok=True)
    for key, value in values.items():
        set_key(env_path, key, value, quote_mode="never")
    return env_path


class AppSettings(BaseSettings):
    """Central settings, read from HFSUBSET_* variables and .env files."""

    model_config = SettingsConfigDict(
        env_prefix="HFSUBSET_",
        extra="ignore",
        case_sensitive=False,
        # Project .env first, then the per-user file.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    endpoint: str = Field(
        default=DEFAULT_ENDPOINT,
        min_length=1,
        description="Base URL of the hfsubset service.",
    )
    http_timeout_seconds: float = Field(
        default=300.0,
        gt=0,
        description="Timeout per HTTP request (seconds).",
    )
    user_agent: str = Field(
        default=f"hfsubset/{__version__}",
        min_length=1,
        description="Client identity sent with every request.",
    )
    protocol: WireProtocol = Field(
        default=WireProtocol.REST,
        description="Wire protocol: 'rest' (GET /subset) or legacy 'lambda'.",
    )
    verify: bool = Field(
        default=True,
        description="Run the HEAD preflight before requesting a subset.",
    )
