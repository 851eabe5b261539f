"""Driver process management."""

from jsonwire.browser.driver import WebDriver, edge_driver, ie11_driver, safari_driver
from jsonwire.browser.probe import probe_port
from jsonwire.browser.process import DriverProcess
from jsonwire.browser.specs import EDGE, IE11, SAFARI, DriverSpec

__all__ = [
    "WebDriver",
    "edge_driver",
    "ie11_driver",
    "safari_driver",
    "probe_port",
    "DriverProcess",
    "DriverSpec",
    "EDGE",
    "IE11",
    "SAFARI",
]
