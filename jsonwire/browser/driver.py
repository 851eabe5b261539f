"""WebDriver façade combining a driver process with the wire client."""

from types import TracebackType
from typing import Any

import httpx

from jsonwire.browser.process import DriverProcess
from jsonwire.browser.specs import EDGE, IE11, SAFARI, DriverSpec
from jsonwire.config import settings
from jsonwire.models import Capabilities, DriverOptions, Session, Status
from jsonwire.wire.commands import WireClient
from jsonwire.wire.errors import DriverNotRunningError
from jsonwire.wire.transport import WireTransport


class WebDriver:
    """A driver binary and the sessions it hosts."""

    def __init__(
        self,
        spec: DriverSpec,
        path: str,
        options: DriverOptions | None = None,
        *,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the driver.

        Args:
            spec: Driver family to launch
            path: Path to the driver binary
            options: Process configuration, defaults listen on the family's port
            http_transport: Optional httpx transport for protocol calls
        """
        if options is None:
            options = DriverOptions(port=spec.default_port)
        self.spec = spec
        self.process = DriverProcess(spec, path, options)
        self._http_transport = http_transport
        self._client: WireClient | None = None

    @property
    def options(self) -> DriverOptions:
        """Process configuration."""
        return self.process.options

    @property
    def url(self) -> str | None:
        """Base URL of the running driver."""
        return self.process.base_url

    @property
    def client(self) -> WireClient:
        """Wire client bound to the running driver."""
        if self._client is None:
            raise DriverNotRunningError(f"{self.spec.name} not running")
        return self._client

    async def start(self) -> None:
        """Launch the driver process and connect the wire client."""
        base_url = await self.process.start()
        self._client = WireClient(WireTransport(base_url, self._http_transport))

    async def stop(self) -> None:
        """Stop the driver process."""
        self._client = None
        await self.process.stop()

    async def wait_closed(self) -> None:
        """Wait until output of the stopped driver is fully copied."""
        await self.process.wait_closed()

    async def status(self) -> Status:
        """Query the driver's status."""
        return await self.client.status()

    async def new_session(
        self,
        desired: Capabilities | None = None,
        required: Capabilities | None = None,
    ) -> Session:
        """Create a new session owned by this driver."""
        session = await self.client.new_session(desired, required)
        return session.bind(self)

    async def sessions(self) -> list[Session]:
        """Return the active sessions of this driver."""
        sessions = await self.client.sessions()
        return [session.bind(self) for session in sessions]

    async def __aenter__(self) -> "WebDriver":
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self.process.running:
            await self.stop()


def _make_driver(
    spec: DriverSpec,
    path: str,
    http_transport: httpx.AsyncBaseTransport | None,
    options: dict[str, Any],
) -> WebDriver:
    options.setdefault("port", spec.default_port)
    return WebDriver(
        spec, path, DriverOptions(**options), http_transport=http_transport
    )


def edge_driver(
    path: str | None = None,
    *,
    http_transport: httpx.AsyncBaseTransport | None = None,
    **options: Any,
) -> WebDriver:
    """Create an Edge driver. Options are DriverOptions fields."""
    return _make_driver(EDGE, path or settings.edge_driver_path, http_transport, options)


def ie11_driver(
    path: str | None = None,
    *,
    http_transport: httpx.AsyncBaseTransport | None = None,
    **options: Any,
) -> WebDriver:
    """Create an Internet Explorer 11 driver. Options are DriverOptions fields."""
    return _make_driver(IE11, path or settings.ie11_driver_path, http_transport, options)


def safari_driver(
    path: str | None = None,
    *,
    http_transport: httpx.AsyncBaseTransport | None = None,
    **options: Any,
) -> WebDriver:
    """Create a Safari driver. Options are DriverOptions fields."""
    return _make_driver(
        SAFARI, path or settings.safari_driver_path, http_transport, options
    )
