"""Tests for environment-driven settings."""

import json

import pytest
from pydantic import ValidationError

from heimdall.config import DEFAULT_COMMAND_RESPONSES, Settings


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep a developer's .env file and variables out of the tests."""
    monkeypatch.chdir(tmp_path)
    for name in ("TELEGRAM_BOT_TOKEN", "ENABLED", "ANNOUNCE_CHAT_ID", "LOG_LEVEL", "SERVER__PORT"):
        monkeypatch.delenv(name, raising=False)


def test_token_required():
    with pytest.raises(ValidationError):
        Settings()


def test_defaults(monkeypatch):
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "token")
    settings = Settings()

    assert settings.enabled is True
    assert settings.announce_chat_id is None
    assert settings.server.process_name == "valheim_server"
    assert settings.server.port == 2456
    assert settings.server.host == "127.0.0.1"
    assert settings.automated_response.enabled is True
    assert settings.automated_response.command_responses == DEFAULT_COMMAND_RESPONSES


def test_nested_overrides(monkeypatch):
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "token")
    monkeypatch.setenv("SERVER__PORT", "2457")
    monkeypatch.setenv("DETAILS__PASSWORD", "secret")
    monkeypatch.setenv("AUTOMATED_RESPONSE__ENABLED", "false")
    settings = Settings()

    assert settings.server.port == 2457
    assert settings.details.password == "secret"
    assert settings.automated_response.enabled is False


def test_command_keywords_lowercased(monkeypatch):
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "token")
    monkeypatch.setenv(
        "AUTOMATED_RESPONSE__COMMAND_RESPONSES",
        json.dumps({"Info": "info text", " RULES ": "be nice"}),
    )
    settings = Settings()

    assert settings.automated_response.command_responses == {"info": "info text", "rules": "be nice"}


def test_log_level_normalised(monkeypatch):
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "token")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert Settings().log_level == "DEBUG"


def test_unknown_log_level_rejected(monkeypatch):
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "token")
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    with pytest.raises(ValidationError):
        Settings()
