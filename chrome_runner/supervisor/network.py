import socket
import asyncio
import logging
from enum import Enum

log = logging.getLogger(__name__)


class ProbeResult(Enum):
    """Outcome of a TCP reachability probe."""
    REACHABLE = "reachable"
    UNREACHABLE = "unreachable"


def get_random_port(host: str = "127.0.0.1") -> int:
    """
    Asks the OS for a port that is currently free on the local host.

    :param host: The interface to bind the throwaway socket to.
    :return: The port number.
    """
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind((host, 0))
        return sock.getsockname()[1]


async def is_port_open(port: int, host: str = "127.0.0.1", timeout: float = 1.0) -> ProbeResult:
    """
    Checks whether a TCP listener currently accepts connections on host:port.

    :param port: The port to probe.
    :param host: The host to probe.
    :param timeout: Seconds to wait for the connection to be established.
    :return: `ProbeResult.REACHABLE` if a connection was made, else `ProbeResult.UNREACHABLE`.
    """
    if not port:
        return ProbeResult.UNREACHABLE
    try:
        _, writer = await asyncio.wait_for(asyncio.open_connection(host, port), timeout)
    except (OSError, asyncio.TimeoutError) as e:
        log.debug(f"Port {host}:{port} not reachable: {e!r}")
        return ProbeResult.UNREACHABLE

    writer.close()
    try:
        await writer.wait_closed()
    except OSError as e:
        log.debug(f"Error while closing probe connection to {host}:{port}: {e!r}")
    return ProbeResult.REACHABLE
