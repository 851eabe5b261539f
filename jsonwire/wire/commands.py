"""Session and status commands."""

from typing import Any

from pydantic import TypeAdapter, ValidationError

from jsonwire.models import Capabilities, Session, Status
from jsonwire.utils.logging import get_logger
from jsonwire.wire.errors import ResponseDecodeError
from jsonwire.wire.transport import WireTransport

logger = get_logger(__name__)

_capabilities_adapter = TypeAdapter(Capabilities)
_sessions_adapter = TypeAdapter(list[Session])


class WireClient:
    """Session level commands sent through a WireTransport."""

    def __init__(self, transport: WireTransport) -> None:
        self.transport = transport

    async def status(self) -> Status:
        """Query the server's status."""
        _, value = await self.transport.do(None, "GET", "/status")
        try:
            return Status.model_validate(value if value is not None else {})
        except ValidationError as e:
            raise ResponseDecodeError(f"invalid status response: {e}") from e

    async def new_session(
        self,
        desired: Capabilities | None = None,
        required: Capabilities | None = None,
    ) -> Session:
        """
        Create a new session.

        The server creates the session that most closely matches the desired
        and required capabilities. Required capabilities take priority and must
        be met for the session to be created.

        Args:
            desired: Capabilities the caller would like
            required: Capabilities the session must have

        Returns:
            Session with the id and capabilities chosen by the server
        """
        if desired is None:
            desired = {}
        params: dict[str, Any] = {
            "desiredCapabilities": desired,
            "requiredCapabilities": required,
            "capabilities": desired,
        }
        session_id, value = await self.transport.do(params, "POST", "/session")
        try:
            capabilities = _capabilities_adapter.validate_python(
                value if value is not None else {}
            )
        except ValidationError as e:
            raise ResponseDecodeError(f"invalid capabilities in response: {e}") from e

        logger.info("Session created", session_id=session_id)
        return Session(id=session_id, capabilities=capabilities)

    async def sessions(self) -> list[Session]:
        """Return the currently active sessions."""
        _, value = await self.transport.do(None, "GET", "/sessions")
        try:
            return _sessions_adapter.validate_python(value if value is not None else [])
        except ValidationError as e:
            raise ResponseDecodeError(f"invalid sessions response: {e}") from e
