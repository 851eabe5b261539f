"""Wire protocol errors and status code translation."""

import json
from enum import IntEnum
from typing import Any

from pydantic import ValidationError

from jsonwire.models.envelope import Envelope, ErrorPayload, StackFrame


class StatusCode(IntEnum):
    """Legacy JSON Wire Protocol status codes."""

    SUCCESS = 0
    NO_SUCH_DRIVER = 6
    NO_SUCH_ELEMENT = 7
    NO_SUCH_FRAME = 8
    UNKNOWN_COMMAND = 9
    STALE_ELEMENT_REFERENCE = 10
    ELEMENT_NOT_VISIBLE = 11
    INVALID_ELEMENT_STATE = 12
    UNKNOWN_ERROR = 13
    ELEMENT_IS_NOT_SELECTABLE = 15
    JAVASCRIPT_ERROR = 17
    XPATH_LOOKUP_ERROR = 19
    TIMEOUT = 21
    NO_SUCH_WINDOW = 23
    INVALID_COOKIE_DOMAIN = 24
    UNABLE_TO_SET_COOKIE = 25
    UNEXPECTED_ALERT_OPEN = 26
    NO_ALERT_OPEN_ERROR = 27
    SCRIPT_TIMEOUT = 28
    INVALID_ELEMENT_COORDINATES = 29
    IME_NOT_AVAILABLE = 30
    IME_ENGINE_ACTIVATION_FAILED = 31
    INVALID_SELECTOR = 32
    SESSION_NOT_CREATED_EXCEPTION = 33
    MOVE_TARGET_OUT_OF_BOUNDS = 34


STATUS_DESCRIPTIONS: dict[int, str] = {
    StatusCode.SUCCESS: "The command executed successfully.",
    StatusCode.NO_SUCH_DRIVER: "A session is either terminated or not started.",
    StatusCode.NO_SUCH_ELEMENT: (
        "An element could not be located on the page using the given search parameters."
    ),
    StatusCode.NO_SUCH_FRAME: (
        "A request to switch to a frame could not be satisfied because the frame "
        "could not be found."
    ),
    StatusCode.UNKNOWN_COMMAND: (
        "The requested resource could not be found, or a request was received using "
        "an HTTP method that is not supported by the mapped resource."
    ),
    StatusCode.STALE_ELEMENT_REFERENCE: (
        "An element command failed because the referenced element is no longer "
        "attached to the DOM."
    ),
    StatusCode.ELEMENT_NOT_VISIBLE: (
        "An element command could not be completed because the element is not "
        "visible on the page."
    ),
    StatusCode.INVALID_ELEMENT_STATE: (
        "An element command could not be completed because the element is in an "
        "invalid state (e.g. attempting to click a disabled element)."
    ),
    StatusCode.UNKNOWN_ERROR: (
        "An unknown server-side error occurred while processing the command."
    ),
    StatusCode.ELEMENT_IS_NOT_SELECTABLE: (
        "An attempt was made to select an element that cannot be selected."
    ),
    StatusCode.JAVASCRIPT_ERROR: (
        "An error occurred while executing user supplied JavaScript."
    ),
    StatusCode.XPATH_LOOKUP_ERROR: (
        "An error occurred while searching for an element by XPath."
    ),
    StatusCode.TIMEOUT: "An operation did not complete before its timeout expired.",
    StatusCode.NO_SUCH_WINDOW: (
        "A request to switch to a different window could not be satisfied because "
        "the window could not be found."
    ),
    StatusCode.INVALID_COOKIE_DOMAIN: (
        "An illegal attempt was made to set a cookie under a different domain than "
        "the current page."
    ),
    StatusCode.UNABLE_TO_SET_COOKIE: (
        "A request to set a cookie's value could not be satisfied."
    ),
    StatusCode.UNEXPECTED_ALERT_OPEN: "A modal dialog was open, blocking this operation.",
    StatusCode.NO_ALERT_OPEN_ERROR: (
        "An attempt was made to operate on a modal dialog when one was not open."
    ),
    StatusCode.SCRIPT_TIMEOUT: "A script did not complete before its timeout expired.",
    StatusCode.INVALID_ELEMENT_COORDINATES: (
        "The coordinates provided to an interactions operation are invalid."
    ),
    StatusCode.IME_NOT_AVAILABLE: "IME was not available.",
    StatusCode.IME_ENGINE_ACTIVATION_FAILED: "An IME engine could not be started.",
    StatusCode.INVALID_SELECTOR: "Argument was an invalid selector (e.g. XPath/CSS).",
    StatusCode.SESSION_NOT_CREATED_EXCEPTION: "A new session could not be created.",
    StatusCode.MOVE_TARGET_OUT_OF_BOUNDS: (
        "Target provided for a move action is out of bounds."
    ),
}

# Labels for HTTP status codes. 200 has none: some drivers answer errors with 200.
RESPONSE_CODE_LABELS: dict[int, str] = {
    200: "",
    400: "400: Missing Command Parameters",
    404: "404: Unknown command/Resource Not Found",
    405: "405: Invalid Command Method",
    500: "500: Failed Command",
    501: "501: Unimplemented Command",
}

STATUS_NOT_SPECIFIED = -1


class WireError(Exception):
    """Base class for all jsonwire errors."""

    pass


class InvalidMethodError(WireError):
    """HTTP method not supported by the wire protocol."""

    pass


class ResponseDecodeError(WireError):
    """Driver response did not have the expected shape."""

    pass


class DriverError(WireError):
    """Driver process lifecycle error."""

    pass


class DriverStartError(DriverError):
    """Driver process could not be started."""

    pass


class DriverAlreadyRunningError(DriverStartError):
    """Start requested while the driver process is running."""

    pass


class DriverNotRunningError(DriverError):
    """Operation requires a running driver process."""

    pass


class PortProbeTimeoutError(DriverStartError):
    """Driver port did not accept connections before the deadline."""

    pass


class CommandError(WireError):
    """Error reported by the driver for a command."""

    def __init__(
        self,
        status_code: int = STATUS_NOT_SPECIFIED,
        error_type: str = "",
        message: str = "",
        *,
        error: str = "",
        screen: str = "",
        class_name: str = "",
        stack_trace: list[StackFrame] | None = None,
    ) -> None:
        self.status_code = status_code
        self.error_type = error_type
        self.message = message
        self.error = error
        self.screen = screen
        self.class_name = class_name
        self.stack_trace = stack_trace or []
        super().__init__(self._render())

    @property
    def description(self) -> str:
        """Human readable description of the status code."""
        if self.status_code == STATUS_NOT_SPECIFIED:
            return "status code not specified"
        text = STATUS_DESCRIPTIONS.get(self.status_code)
        if text is None:
            return f"unknown status code ({self.status_code})"
        return text

    def _render(self) -> str:
        m = self.error_type
        if m:
            m += ": "
        m += self.description
        if self.message:
            m += ": " + self.message
        return m

    def __str__(self) -> str:
        return self._render()


def response_code_label(http_status: int) -> str:
    """Label describing an HTTP status code of a failed command."""
    return RESPONSE_CODE_LABELS.get(http_status, "Unknown error")


def parse_error(http_status: int, envelope: Envelope) -> CommandError:
    """
    Build a CommandError from a failed response.

    Args:
        http_status: HTTP status code of the response
        envelope: Decoded response envelope

    Returns:
        CommandError describing the failure
    """
    status = envelope.status
    if status == StatusCode.SUCCESS:
        # Success never reaches here, treat it as missing
        status = STATUS_NOT_SPECIFIED

    error_type = response_code_label(http_status)
    value: Any = envelope.value

    if value is None:
        return CommandError(status, error_type)

    if isinstance(value, str):
        return CommandError(status, error_type, value)

    try:
        payload = ErrorPayload.model_validate(value)
    except ValidationError:
        # Drivers vary in what they put in value, keep it as text
        text = json.dumps(value, separators=(",", ":"))
        return CommandError(status, error_type, text)

    return CommandError(
        status,
        error_type or payload.error,
        payload.message,
        error=payload.error,
        screen=payload.screen,
        class_name=payload.class_name,
        stack_trace=payload.stack_trace,
    )
