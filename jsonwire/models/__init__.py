"""Data models for jsonwire."""

from jsonwire.models.driver import DriverOptions
from jsonwire.models.envelope import Envelope, ErrorPayload, StackFrame
from jsonwire.models.session import BuildInfo, Capabilities, OSInfo, Session, Status

__all__ = [
    "DriverOptions",
    "Envelope",
    "ErrorPayload",
    "StackFrame",
    "BuildInfo",
    "Capabilities",
    "OSInfo",
    "Session",
    "Status",
]
