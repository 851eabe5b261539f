"""Tests for session and status commands."""

import json

import httpx
import pytest

from jsonwire.models import Session, Status
from jsonwire.wire.commands import WireClient
from jsonwire.wire.errors import CommandError, ResponseDecodeError
from jsonwire.wire.transport import WireTransport


def make_client(routes: dict[tuple[str, str], dict]) -> tuple[WireClient, list[httpx.Request]]:
    """Client answering each (method, path) with a fixed envelope."""
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        body = routes.get((request.method, request.url.path))
        if body is None:
            return httpx.Response(
                404, json={"sessionId": "", "status": 9, "value": "no route"}
            )
        return httpx.Response(200, json=body)

    transport = WireTransport("http://localhost:9515", httpx.MockTransport(handler))
    return WireClient(transport), seen


@pytest.mark.asyncio
async def test_new_session_payload() -> None:
    """Test desired and required capabilities are both sent."""
    client, seen = make_client(
        {
            ("POST", "/session"): {
                "sessionId": "s-1",
                "status": 0,
                "value": {"browserName": "edge", "platform": "WINDOWS"},
            }
        }
    )

    session = await client.new_session(
        {"browserName": "edge"}, {"acceptSslCerts": True}
    )

    body = json.loads(seen[0].content)
    assert body == {
        "desiredCapabilities": {"browserName": "edge"},
        "requiredCapabilities": {"acceptSslCerts": True},
        "capabilities": {"browserName": "edge"},
    }
    assert isinstance(session, Session)
    assert session.id == "s-1"
    assert session.capabilities == {"browserName": "edge", "platform": "WINDOWS"}
    assert session.driver is None


@pytest.mark.asyncio
async def test_new_session_defaults_desired_to_empty() -> None:
    """Test missing desired capabilities are sent as an empty object."""
    client, seen = make_client(
        {("POST", "/session"): {"sessionId": "s-2", "status": 0, "value": {}}}
    )

    await client.new_session()

    body = json.loads(seen[0].content)
    assert body["desiredCapabilities"] == {}
    assert body["capabilities"] == {}
    assert body["requiredCapabilities"] is None


@pytest.mark.asyncio
async def test_new_session_through_redirect() -> None:
    """Test the session id comes from the redirect target."""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "POST":
            return httpx.Response(303, headers={"Location": "/session/abc123"})
        return httpx.Response(
            200,
            json={"sessionId": "abc123", "status": 0, "value": {"browserName": "safari"}},
        )

    client = WireClient(
        WireTransport("http://localhost:9516", httpx.MockTransport(handler))
    )

    session = await client.new_session({"browserName": "safari"})

    assert session.id == "abc123"
    assert session.capabilities == {"browserName": "safari"}


@pytest.mark.asyncio
async def test_new_session_error() -> None:
    """Test a refused session surfaces a CommandError."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            500,
            json={"sessionId": "", "status": 33, "value": {"message": "no browser"}},
        )

    client = WireClient(
        WireTransport("http://localhost:9515", httpx.MockTransport(handler))
    )

    with pytest.raises(CommandError) as exc_info:
        await client.new_session()

    assert str(exc_info.value) == (
        "500: Failed Command: A new session could not be created.: no browser"
    )


@pytest.mark.asyncio
async def test_new_session_bad_capabilities() -> None:
    """Test a value that is not a capability map is rejected."""
    client, _ = make_client(
        {("POST", "/session"): {"sessionId": "s-3", "status": 0, "value": [1, 2]}}
    )

    with pytest.raises(ResponseDecodeError):
        await client.new_session()


@pytest.mark.asyncio
async def test_sessions() -> None:
    """Test active sessions are listed in order."""
    client, seen = make_client(
        {
            ("GET", "/sessions"): {
                "sessionId": "",
                "status": 0,
                "value": [
                    {"id": "a", "capabilities": {"browserName": "edge"}},
                    {"id": "b", "capabilities": None},
                ],
            }
        }
    )

    sessions = await client.sessions()

    assert seen[0].method == "GET"
    assert [s.id for s in sessions] == ["a", "b"]
    assert sessions[0].capabilities == {"browserName": "edge"}
    assert sessions[1].capabilities == {}


@pytest.mark.asyncio
async def test_sessions_bad_value() -> None:
    """Test a value that is not a list of sessions is rejected."""
    client, _ = make_client(
        {("GET", "/sessions"): {"sessionId": "", "status": 0, "value": {"id": "a"}}}
    )

    with pytest.raises(ResponseDecodeError):
        await client.sessions()


@pytest.mark.asyncio
async def test_status() -> None:
    """Test the status snapshot is decoded."""
    client, _ = make_client(
        {
            ("GET", "/status"): {
                "sessionId": "",
                "status": 0,
                "value": {
                    "build": {"version": "3.141.59", "revision": "e82be7d358"},
                    "os": {"arch": "x86", "name": "windows", "version": "10"},
                    "ready": True,
                },
            }
        }
    )

    status = await client.status()

    assert isinstance(status, Status)
    assert status.build.version == "3.141.59"
    assert status.build.revision == "e82be7d358"
    assert status.os.name == "windows"
    assert status.ready is True


@pytest.mark.asyncio
async def test_status_is_fresh_each_call() -> None:
    """Test every status call returns a new snapshot."""
    client, seen = make_client(
        {("GET", "/status"): {"sessionId": "", "status": 0, "value": {}}}
    )

    first = await client.status()
    second = await client.status()

    assert first is not second
    assert len(seen) == 2
    assert first.build.version is None


@pytest.mark.asyncio
async def test_status_null_sections() -> None:
    """Test null build and os sections decode as empty."""
    client, _ = make_client(
        {
            ("GET", "/status"): {
                "sessionId": "",
                "status": 0,
                "value": {"build": None, "os": None},
            }
        }
    )

    status = await client.status()

    assert status.build.version is None
    assert status.os.name is None
