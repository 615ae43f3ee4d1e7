"""Human-readable rendering of a ServerStatus."""

from datetime import datetime, timedelta, timezone

from heimdall.config import ServerDetails
from heimdall.models import ServerStatus


def format_uptime(uptime: timedelta) -> str:
    """Render an uptime using the largest applicable unit."""
    total = max(int(uptime.total_seconds()), 0)
    days, rest = divmod(total, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)

    if days >= 1:
        return f"{days}d {hours}h {minutes}m"
    if hours >= 1:
        return f"{hours}h {minutes}m"
    return f"{minutes}m {seconds}s"


def format_server_status(
    status: ServerStatus,
    details: ServerDetails,
    now: datetime | None = None,
) -> str:
    """Render ``status`` as a multi-line chat reply.

    ``now`` is the reference for uptime; it defaults to the current time.
    """
    now = now or datetime.now(timezone.utc)
    info = status.process_info
    state = "🟢 Online" if status.is_online else "🔴 Offline"

    lines = [f"{state} - {details.name}", ""]

    if status.is_online:
        lines.append(f"🌍 World: {details.world}")
        lines.append("👥 Status: Accepting brave Vikings!")
        if details.password:
            lines.append(f"🔒 Password: {details.password}")
        if details.mods:
            lines.append(f"⚔️ Mods: {details.mods}")
        lines.append("📡 Connection: Ready for adventure")

        if status.response_time_ms is not None:
            lines.append(f"⚡ Response Time: {status.response_time_ms}ms")

        if info is not None:
            memory_mb = info.working_set_bytes // (1024 * 1024)
            lines.append(f"🖥️ Process: {info.name} (PID: {info.pid})")
            lines.append(f"⏱️ Uptime: {format_uptime(now - info.started_at)}")
            lines.append(f"🧠 Memory: {memory_mb:,} MB")
    else:
        lines.append(f"❌ Issue: {status.message}")

        if status.process_running:
            lines.append("🔄 Process Status: Running (but port not responding)")
            if info is not None:
                lines.append(f"⏱️ Process Uptime: {format_uptime(now - info.started_at)}")
                lines.append(f"🧠 Memory: {info.working_set_bytes // (1024 * 1024):,} MB")
            if status.response_time_ms is not None:
                lines.append(f"⚡ Probe Time: {status.response_time_ms}ms")
            lines.append("🔧 Suggestion: Server may be starting up or experiencing issues")
        else:
            lines.append("🔄 Process Status: Not Running")
            lines.append("🔧 Suggestion: Start the Valheim dedicated server")

    lines.append(f"🕒 Last Checked: {status.checked_at:%Y-%m-%d %H:%M:%S} UTC")
    lines.append("")

    if status.is_online:
        lines.append("Ready for your next adventure! 🏔️")
    else:
        lines.append("Please wait for server to start or check server status. 🏔️")

    return "\n".join(lines)
