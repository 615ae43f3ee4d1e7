"""Liveness and reachability checks for the locally hosted game server.

A check looks the server process up by name, then probes its port on the
loopback interface: UDP first, TCP as a fallback. Valheim only speaks its own
UDP protocol and stays silent on our probe datagram, so ``port_open`` is
frequently False for a perfectly healthy server. The process check is the
signal to trust when the two disagree.
"""

import asyncio
import contextlib
import logging
import time
from datetime import datetime, timezone

import psutil

from heimdall.config import ServerSettings
from heimdall.models import PortCheckResult, ProcessInfo, ServerStatus

logger = logging.getLogger(__name__)

UDP_PROBE_PAYLOAD = b"\x00\x00\x00\x00"

MSG_NOT_RUNNING = "Valheim server process is not running"
MSG_ACCEPTING = "Valheim server is running and accepting connections"
MSG_PORT_SILENT = "Valheim server process is running but port is not responding"


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


def find_server_processes(process_name: str) -> list[ProcessInfo]:
    """Return every live process whose name is exactly ``process_name``.

    A trailing ``.exe`` on the OS-reported name is ignored.
    """
    matches = []
    for proc in psutil.process_iter(["pid", "name", "create_time", "memory_info"]):
        name = proc.info.get("name") or ""
        if process_name not in (name, name.removesuffix(".exe")):
            continue

        created = proc.info.get("create_time")
        memory = proc.info.get("memory_info")
        matches.append(
            ProcessInfo(
                pid=proc.info["pid"],
                started_at=(
                    datetime.fromtimestamp(created, tz=timezone.utc)
                    if created is not None
                    else datetime.now(timezone.utc)
                ),
                working_set_bytes=memory.rss if memory is not None else 0,
                name=name,
            )
        )
    return matches


class _ProbeProtocol(asyncio.DatagramProtocol):
    """Resolves ``reply`` with the first datagram or socket error."""

    def __init__(self):
        self.reply: asyncio.Future[bytes] = asyncio.get_running_loop().create_future()

    def datagram_received(self, data: bytes, addr) -> None:
        if not self.reply.done():
            self.reply.set_result(data)

    def error_received(self, exc: Exception) -> None:
        # ICMP port unreachable shows up here on a connected socket
        if not self.reply.done():
            self.reply.set_exception(exc)

    def connection_lost(self, exc: Exception | None) -> None:
        if not self.reply.done():
            self.reply.set_exception(exc or ConnectionError("UDP transport closed"))


class ServerProber:
    """Checks whether the game server process is alive and its port reachable."""

    def __init__(
        self,
        process_name: str,
        port: int,
        host: str = "127.0.0.1",
        udp_timeout: float = 1.0,
        tcp_timeout: float = 2.0,
    ):
        self.process_name = process_name
        self.port = port
        self.host = host
        self.udp_timeout = udp_timeout
        self.tcp_timeout = tcp_timeout

    @classmethod
    def from_settings(cls, server: ServerSettings) -> "ServerProber":
        return cls(
            process_name=server.process_name,
            port=server.port,
            host=server.host,
            udp_timeout=server.udp_timeout,
            tcp_timeout=server.tcp_timeout,
        )

    async def check_status(self) -> ServerStatus:
        """Probe the server once. Never raises; failures become an offline status."""
        try:
            logger.debug("Checking server status for process: %s", self.process_name)
            processes = await asyncio.to_thread(find_server_processes, self.process_name)

            if not processes:
                logger.info("Server process '%s' is not running", self.process_name)
                return ServerStatus(
                    is_online=False,
                    process_running=False,
                    port_open=False,
                    message=MSG_NOT_RUNNING,
                )

            if len(processes) > 1:
                logger.debug(
                    "Found %d processes named '%s', using pid %d",
                    len(processes),
                    self.process_name,
                    processes[0].pid,
                )
            process_info = processes[0]

            port_result = await self.check_port()
            return ServerStatus(
                is_online=port_result.is_open,
                process_running=True,
                port_open=port_result.is_open,
                response_time_ms=port_result.response_time_ms,
                process_info=process_info,
                message=MSG_ACCEPTING if port_result.is_open else MSG_PORT_SILENT,
            )
        except Exception as e:
            logger.exception("Error checking server status")
            return ServerStatus(
                is_online=False,
                process_running=False,
                port_open=False,
                message=f"Error checking server: {e}",
            )

    async def check_port(self) -> PortCheckResult:
        """UDP probe, then a TCP connect if UDP stayed closed."""
        result = await self.check_udp()
        if result.is_open:
            logger.debug("UDP port check successful for port %d", self.port)
            return result

        logger.debug("UDP check failed, trying TCP check for port %d", self.port)
        result = await self.check_tcp()
        if not result.is_open:
            logger.debug("Both UDP and TCP port checks failed for port %d", self.port)
        return result

    async def check_udp(self) -> PortCheckResult:
        """Send the probe datagram and wait for any reply.

        Silence until the timeout counts as closed.
        """
        loop = asyncio.get_running_loop()
        started = time.perf_counter()
        transport = None
        try:
            transport, protocol = await loop.create_datagram_endpoint(
                _ProbeProtocol, remote_addr=(self.host, self.port)
            )
            transport.sendto(UDP_PROBE_PAYLOAD)
            await asyncio.wait_for(protocol.reply, timeout=self.udp_timeout)
            is_open = True
        except (OSError, asyncio.TimeoutError) as e:
            logger.debug("UDP probe of %s:%d closed: %r", self.host, self.port, e)
            is_open = False
        finally:
            if transport is not None:
                transport.close()
        return PortCheckResult(is_open=is_open, response_time_ms=_elapsed_ms(started))

    async def check_tcp(self) -> PortCheckResult:
        started = time.perf_counter()
        writer = None
        try:
            _, writer = await asyncio.wait_for(
                asyncio.open_connection(self.host, self.port), timeout=self.tcp_timeout
            )
            is_open = True
        except (OSError, asyncio.TimeoutError) as e:
            logger.debug("TCP probe of %s:%d closed: %r", self.host, self.port, e)
            is_open = False
        finally:
            if writer is not None:
                writer.close()
                with contextlib.suppress(OSError):
                    await writer.wait_closed()
        return PortCheckResult(is_open=is_open, response_time_ms=_elapsed_ms(started))
