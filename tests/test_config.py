from __future__ import annotations

import sys

import pytest
from dotenv import dotenv_values
from pydantic import ValidationError

from hfsubset import __version__
from hfsubset.core.config import (
    DEFAULT_ENDPOINT,
    AppSettings,
    get_user_env_file,
    save_user_settings,
)
from hfsubset.core.domain import WireProtocol
from hfsubset.core.errors import InvalidEndpoint

posix_only = pytest.mark.skipif(
    sys.platform.startswith("win") or sys.platform == "darwin",
    reason="XDG_CONFIG_HOME layout",
)


def test_defaults():
    settings = AppSettings(_env_file=None)

    assert settings.endpoint == DEFAULT_ENDPOINT
    assert settings.http_timeout_seconds == 300.0
    assert settings.user_agent == f"hfsubset/{__version__}"
    assert settings.protocol is WireProtocol.REST
    assert settings.verify is True


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("HFSUBSET_ENDPOINT", "https://hfsubset.example.org")
    monkeypatch.setenv("HFSUBSET_PROTOCOL", "lambda")
    monkeypatch.setenv("HFSUBSET_VERIFY", "false")

    settings = AppSettings(_env_file=None)

    assert settings.endpoint == "https://hfsubset.example.org"
    assert settings.protocol is WireProtocol.LAMBDA
    assert settings.verify is False


def test_dotenv_file_is_read(tmp_path):
    env_file = tmp_path / "custom.env"
    env_file.write_text("HFSUBSET_ENDPOINT=http://10.0.0.1:3101\n", encoding="utf-8")

    settings = AppSettings(_env_file=env_file)

    assert settings.endpoint == "http://10.0.0.1:3101"


def test_timeout_must_be_positive():
    with pytest.raises(ValidationError):
        AppSettings(http_timeout_seconds=0, _env_file=None)


@posix_only
def test_user_env_file_follows_xdg(tmp_path):
    assert get_user_env_file() == tmp_path / "config" / "hfsubset" / ".env"


@posix_only
def test_saved_settings_are_merged_and_read_back():
    save_user_settings(endpoint=" http://a:1 ")
    save_user_settings(protocol="LAMBDA", verify=False)
    path = save_user_settings(endpoint="http://b:2")

    assert dotenv_values(path) == {
        "HFSUBSET_ENDPOINT": "http://b:2",
        "HFSUBSET_PROTOCOL": "lambda",
        "HFSUBSET_VERIFY": "false",
    }
    settings = AppSettings(_env_file=path)
    assert settings.endpoint == "http://b:2"
    assert settings.protocol is WireProtocol.LAMBDA
    assert settings.verify is False


def test_invalid_endpoint_is_not_saved():
    with pytest.raises(InvalidEndpoint):
        save_user_settings(endpoint="ftp://a:1")

    assert not get_user_env_file().exists()


def test_unknown_protocol_is_not_saved():
    with pytest.raises(ValueError):
        save_user_settings(endpoint="http://a:1", protocol="grpc")

    assert not get_user_env_file().exists()
