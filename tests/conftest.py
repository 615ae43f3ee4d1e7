"""Shared test fixtures."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from heimdall.config import ServerDetails
from heimdall.models import ProcessInfo, ServerStatus

NOW = datetime(2025, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def details():
    return ServerDetails(name="The Thatch Hut", world="Midgard", password="hunter2", mods="ValheimPlus")


@pytest.fixture
def responses():
    return {
        "status": "canned status",
        "help": "help text",
        "info": "info text",
    }


@pytest.fixture
def process_info():
    return ProcessInfo(
        pid=4242,
        started_at=NOW - timedelta(hours=3, minutes=15),
        working_set_bytes=512 * 1024 * 1024,
        name="valheim_server",
    )


@pytest.fixture
def online_status(process_info):
    return ServerStatus(
        is_online=True,
        process_running=True,
        port_open=True,
        response_time_ms=12,
        message="Valheim server is running and accepting connections",
        process_info=process_info,
        checked_at=NOW,
    )


@pytest.fixture
def fake_prober(online_status):
    prober = MagicMock()
    prober.check_status = AsyncMock(return_value=online_status)
    return prober
