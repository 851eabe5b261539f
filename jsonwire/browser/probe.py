"""TCP port readiness probing."""

import asyncio

from jsonwire.config import settings
from jsonwire.utils.logging import get_logger
from jsonwire.wire.errors import PortProbeTimeoutError

logger = get_logger(__name__)


async def probe_port(
    port: int,
    timeout: float,
    *,
    host: str = "localhost",
    interval: float | None = None,
) -> None:
    """
    Wait until a TCP port accepts connections.

    Args:
        port: Port to connect to
        timeout: Maximum wait time in seconds
        host: Host to connect to
        interval: Delay between attempts, defaults to settings

    Raises:
        PortProbeTimeoutError: If nothing accepted a connection in time
    """
    if interval is None:
        interval = settings.probe_interval_seconds

    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    attempts = 0

    while True:
        remaining = deadline - loop.time()
        if remaining <= 0:
            break

        attempts += 1
        try:
            _, writer = await asyncio.wait_for(
                asyncio.open_connection(host, port), timeout=remaining
            )
        except Exception as e:
            # Not listening yet
            logger.debug("Port not ready", port=port, attempt=attempts, error=str(e))
        else:
            writer.close()
            try:
                await writer.wait_closed()
            except OSError:
                pass
            logger.debug("Port ready", port=port, attempts=attempts)
            return

        remaining = deadline - loop.time()
        if remaining <= 0:
            break
        await asyncio.sleep(min(interval, remaining))

    raise PortProbeTimeoutError(
        f"driver did not start in time: port {port} not listening after {timeout}s"
    )
