"""JSON Wire Protocol transport and commands."""

from jsonwire.wire.commands import WireClient
from jsonwire.wire.errors import (
    CommandError,
    DriverAlreadyRunningError,
    DriverError,
    DriverNotRunningError,
    DriverStartError,
    InvalidMethodError,
    PortProbeTimeoutError,
    ResponseDecodeError,
    StatusCode,
    WireError,
    parse_error,
)
from jsonwire.wire.transport import WireTransport

__all__ = [
    "WireClient",
    "WireTransport",
    "CommandError",
    "DriverAlreadyRunningError",
    "DriverError",
    "DriverNotRunningError",
    "DriverStartError",
    "InvalidMethodError",
    "PortProbeTimeoutError",
    "ResponseDecodeError",
    "StatusCode",
    "WireError",
    "parse_error",
]
