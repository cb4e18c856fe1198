"""Tests for settings, call config and logging setup."""

from __future__ import annotations

import io
import logging

import orjson
import pytest
from pydantic import ValidationError

from restcall.foundation.config import RestCallConfig, get_settings
from restcall.observability import configure_from_settings, configure_logging


@pytest.fixture
def restore_logging() -> object:
    root = logging.getLogger("restcall")
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_defaults() -> None:
    config = RestCallConfig()
    assert config.content_type == "application/json"
    assert config.accept == "*/*"
    assert config.require_token is True
    assert config.defeat_caching is True


def test_config_is_frozen_and_strict() -> None:
    config = RestCallConfig()
    with pytest.raises(ValidationError):
        config.accept = "text/plain"  # type: ignore[misc]
    with pytest.raises(ValidationError):
        RestCallConfig(acept="typo")  # type: ignore[call-arg]


def test_base_url_validation() -> None:
    assert RestCallConfig(base_url="https://api.test/").base_url == "https://api.test"
    with pytest.raises(ValidationError):
        RestCallConfig(base_url="ftp://api.test")
    with pytest.raises(ValidationError):
        RestCallConfig(accept="   ")


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESTCALL_BASE_URL", "https://graph.example.com")
    monkeypatch.setenv("RESTCALL_DEFEAT_CACHING", "false")
    monkeypatch.setenv("RESTCALL_TIMEOUT", "12.5")
    monkeypatch.setenv("RESTCALL_LOG_LEVEL", "debug")

    settings = get_settings()
    config = RestCallConfig.from_settings()

    assert settings.logging.level == "DEBUG"
    assert config.base_url == "https://graph.example.com"
    assert config.defeat_caching is False
    assert config.timeout == 12.5
    assert get_settings() is settings


def test_text_logging(restore_logging: object) -> None:
    out = io.StringIO()
    configure_logging(format="text", level="DEBUG", output=out)

    logging.getLogger("restcall.orchestrator").info("GET /x -> 200", extra={"duration_ms": 1.5})

    line = out.getvalue().strip()
    assert "[info] restcall.orchestrator: GET /x -> 200" in line
    assert line.endswith("duration_ms=1.5")


def test_json_logging(restore_logging: object) -> None:
    out = io.StringIO()
    configure_logging(format="json", level="INFO", output=out)

    logging.getLogger("restcall.orchestrator").warning("failed", extra={"error_code": "BAD_STATUS"})
    logging.getLogger("restcall.orchestrator").debug("filtered out")

    lines = out.getvalue().splitlines()
    assert len(lines) == 1
    payload = orjson.loads(lines[0])
    assert payload["level"] == "warning"
    assert payload["event"] == "failed"
    assert payload["error_code"] == "BAD_STATUS"


def test_unknown_log_format(restore_logging: object) -> None:
    with pytest.raises(ValueError):
        configure_logging(format="xml")


def test_configure_from_settings(monkeypatch: pytest.MonkeyPatch, restore_logging: object) -> None:
    monkeypatch.setenv("RESTCALL_LOG_LEVEL", "WARNING")
    handler = configure_from_settings()
    assert logging.getLogger("restcall").level == logging.WARNING
    assert logging.getLogger("restcall").handlers == [handler]
