"""HTTP transport for the JSON Wire Protocol."""

import asyncio
import json
from typing import Any

import httpx
from pydantic import ValidationError

from jsonwire.config import settings
from jsonwire.models.envelope import Envelope
from jsonwire.utils.logging import get_logger
from jsonwire.wire.errors import (
    InvalidMethodError,
    ResponseDecodeError,
    WireError,
    parse_error,
)

logger = get_logger(__name__)

ALLOWED_METHODS = frozenset({"GET", "POST", "DELETE"})
REDIRECT_CODES = frozenset({302, 303})


def _build_headers(method: str) -> dict[str, str]:
    headers = {
        "Accept": "application/json",
        "Accept-Charset": "utf-8",
        "Connection": "close",
    }
    if method == "POST":
        headers["Content-Type"] = "application/json;charset=utf-8"
    return headers


def _recover_session_id(value: Any) -> str:
    """Session id nested inside the value of an envelope, or an empty string."""
    if not isinstance(value, dict):
        return ""
    try:
        nested = Envelope.model_validate(value)
    except ValidationError as e:
        logger.debug("Value is not an envelope", error=str(e))
        return ""
    return nested.session_id


class WireTransport:
    """Sends wire protocol commands to a driver."""

    def __init__(
        self,
        base_url: str,
        http_transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | None = None,
    ) -> None:
        """
        Initialize the transport.

        Args:
            base_url: Driver URL, including any path prefix
            http_transport: Optional httpx transport (used by tests)
            timeout: Request deadline in seconds, defaults to settings
        """
        self._base_url = base_url
        self._http_transport = http_transport
        self._timeout = (
            timeout if timeout is not None else settings.request_timeout_seconds
        )

    @property
    def base_url(self) -> str:
        """Driver base URL."""
        return self._base_url

    async def do(
        self,
        params: Any,
        method: str,
        path_format: str,
        *path_args: Any,
    ) -> tuple[str, Any]:
        """
        Send a command and decode the response.

        Args:
            params: JSON body for POST requests
            method: GET, POST or DELETE
            path_format: Path relative to the base URL, with %s placeholders
            path_args: Values substituted into path_format

        Returns:
            Tuple of (session id, decoded value)

        Raises:
            InvalidMethodError: If the method is not supported
            ResponseDecodeError: If the body is not a response envelope
            CommandError: If the driver reported a failure
        """
        if method not in ALLOWED_METHODS:
            raise InvalidMethodError(f"invalid method: {method}")

        path = path_format % path_args if path_args else path_format
        return await self._do(params, method, self._base_url + path)

    async def _do(self, params: Any, method: str, url: str) -> tuple[str, Any]:
        logger.debug(">>", method=method, url=url)

        body: bytes | None = None
        if method == "POST":
            if params is None:
                params = {}
            body = json.dumps(params).encode("utf-8")
            logger.debug(">> body", body=body.decode("utf-8"))

        async with httpx.AsyncClient(
            transport=self._http_transport,
            timeout=self._timeout,
            follow_redirects=False,
            limits=httpx.Limits(max_keepalive_connections=0),
        ) as client:
            request = client.build_request(
                method, url, content=body, headers=_build_headers(method)
            )
            response = await asyncio.wait_for(
                client.send(request), timeout=self._timeout
            )

        logger.debug("Response received", status_code=response.status_code)

        # POST redirects are not followed by the client (POST /session)
        if method == "POST" and response.status_code in REDIRECT_CODES:
            location = response.headers.get("Location")
            if not location:
                raise WireError(
                    f"redirect from {url} without a Location header"
                )
            target = str(request.url.join(location))
            logger.debug("Redirected", location=target)
            return await self._do(None, "GET", target)

        try:
            envelope = Envelope.model_validate_json(response.content)
        except ValidationError as e:
            logger.debug("Undecodable response", body=response.text, error=str(e))
            raise ResponseDecodeError("response must be a JSON object") from e

        if response.status_code >= 400 or envelope.status != 0:
            raise parse_error(response.status_code, envelope)

        session_id = envelope.session_id
        if not session_id:
            session_id = _recover_session_id(envelope.value)

        logger.debug("<<", session_id=session_id, value=envelope.value)
        return session_id, envelope.value
