"""Shared utilities."""

from jsonwire.utils.logging import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
