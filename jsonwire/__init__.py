"""Client for browser drivers speaking the legacy JSON Wire Protocol."""

from jsonwire.browser import WebDriver, edge_driver, ie11_driver, safari_driver
from jsonwire.models import Capabilities, DriverOptions, Session, Status
from jsonwire.utils.logging import setup_logging
from jsonwire.wire import CommandError, WireError

__version__ = "0.1.0"

__all__ = [
    "WebDriver",
    "edge_driver",
    "ie11_driver",
    "safari_driver",
    "Capabilities",
    "DriverOptions",
    "Session",
    "Status",
    "CommandError",
    "WireError",
    "setup_logging",
]
