"""Pytest configuration and shared fixtures."""

import sys

import pytest

from jsonwire.browser.process import DriverProcess
from jsonwire.models import DriverOptions
from jsonwire.utils.logging import setup_logging
from tests.helpers import LISTENING_DRIVER, fake_spec, get_free_port


@pytest.fixture(scope="session", autouse=True)
def configure_logging() -> None:
    """Configure logging the way an application entry point would."""
    setup_logging()


@pytest.fixture
def free_port() -> int:
    """A TCP port nothing listens on."""
    return get_free_port()


@pytest.fixture
def python_path() -> str:
    """Interpreter used as the fake driver binary."""
    return sys.executable


@pytest.fixture
def listening_process(free_port: int, python_path: str) -> DriverProcess:
    """Driver process that opens its port."""
    options = DriverOptions(port=free_port, start_timeout=10)
    return DriverProcess(fake_spec(LISTENING_DRIVER), python_path, options)
