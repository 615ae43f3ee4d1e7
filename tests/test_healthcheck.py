"""Tests for the one-shot probe script."""

from unittest.mock import AsyncMock, patch

from healthcheck import is_server_online
from heimdall.config import Settings


def test_online_server(online_status, capsys):
    with patch("healthcheck.ServerProber.check_status", AsyncMock(return_value=online_status)):
        assert is_server_online(Settings(telegram_bot_token="token")) is True

    assert "Online" in capsys.readouterr().out


def test_offline_server(capsys):
    with patch("heimdall.prober.psutil.process_iter", return_value=[]):
        assert is_server_online(Settings(telegram_bot_token="token")) is False

    assert "Not Running" in capsys.readouterr().out
