"""Status snapshots produced by the server prober."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ProcessInfo:
    """The game server process as seen at probe time."""

    pid: int
    started_at: datetime  # UTC
    working_set_bytes: int
    name: str


@dataclass(frozen=True)
class PortCheckResult:
    is_open: bool
    response_time_ms: int


@dataclass(frozen=True)
class ServerStatus:
    """Result of a single status check.

    On the success path ``is_online`` equals ``process_running and port_open``.
    When the check itself failed every flag is False and ``message`` holds
    the diagnostic.
    """

    is_online: bool
    process_running: bool
    port_open: bool
    message: str
    response_time_ms: int | None = None
    process_info: ProcessInfo | None = None
    checked_at: datetime = field(default_factory=_utcnow)
