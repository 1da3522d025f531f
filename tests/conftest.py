from __future__ import annotations

from typing import Callable

import httpx
import pytest

from hfsubset.adapters.http_client import build_client
from hfsubset.core.config import AppSettings

ENDPOINT = "http://1.2.3.4:5678"

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    for name in (
        "HFSUBSET_ENDPOINT",
        "HFSUBSET_HTTP_TIMEOUT_SECONDS",
        "HFSUBSET_USER_AGENT",
        "HFSUBSET_PROTOCOL",
        "HFSUBSET_VERIFY",
        "NO_COLOR",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(endpoint=ENDPOINT, _env_file=None)


class Recorder:
    """MockTransport handler that records every request it answers."""

    def __init__(self, handler: Handler) -> None:
        self._handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    @property
    def methods(self) -> list[str]:
        return [r.method for r in self.requests]


@pytest.fixture
def make_client(settings):
    """Build a hfsubset client answering through `handler`."""

    clients: list[httpx.Client] = []

    def factory(handler: Handler) -> tuple[httpx.Client, Recorder]:
        recorder = Recorder(handler)
        client = build_client(settings, transport=httpx.MockTransport(recorder))
        clients.append(client)
        return client, recorder

    yield factory

    for client in clients:
        client.close()
