#!/usr/bin/env python3
"""One-shot status probe of the game server.

Prints the status report and exits 0 when the server is online, 1 otherwise.
Suitable for container or service-manager health checks.
"""

import asyncio
import sys

from heimdall.config import Settings
from heimdall.prober import ServerProber
from heimdall.report import format_server_status


def is_server_online(settings: Settings) -> bool:
    """Probe the configured server and print the rendered report."""
    status = asyncio.run(ServerProber.from_settings(settings.server).check_status())
    print(format_server_status(status, settings.details))
    return status.is_online


if __name__ == "__main__":
    sys.exit(0 if is_server_online(Settings()) else 1)
