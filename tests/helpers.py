"""Shared test helpers."""

import asyncio
import socket

from jsonwire.browser.process import DriverProcess
from jsonwire.browser.specs import DriverSpec

# Fake driver: prints its pid, then accepts connections on --port=N
LISTENING_DRIVER = """
import os, socket, sys
port = int(sys.argv[1].split("=", 1)[1])
print("fake driver pid", os.getpid(), flush=True)
print("fake driver error stream", file=sys.stderr, flush=True)
srv = socket.socket()
srv.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
srv.bind(("127.0.0.1", port))
srv.listen()
while True:
    conn, _ = srv.accept()
    conn.close()
"""

# Fake driver that never opens its port
SILENT_DRIVER = """
import os, time
print("fake driver pid", os.getpid(), flush=True)
time.sleep(60)
"""

# Fake driver that reports on stdout when interrupted
CHATTY_DRIVER = """
import socket, sys
port = int(sys.argv[1].split("=", 1)[1])
srv = socket.socket()
srv.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
srv.bind(("127.0.0.1", port))
srv.listen()
print("fake driver ready", flush=True)
try:
    while True:
        conn, _ = srv.accept()
        conn.close()
except KeyboardInterrupt:
    print("fake driver shutting down", flush=True)
"""


def fake_spec(script: str, name: str = "Fakedriver") -> DriverSpec:
    """Driver spec running a Python script through the current interpreter."""
    return DriverSpec(
        name=name,
        default_port=0,
        build_args=lambda options: ["-c", script, f"--port={options.port}"],
    )


def get_free_port() -> int:
    """Get a free port by binding to port 0."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


async def stop_and_wait(driver_process: DriverProcess) -> None:
    """Stop a driver process and wait for the child to exit."""
    process = driver_process._process
    await driver_process.stop()
    if process is not None:
        await asyncio.wait_for(process.wait(), timeout=10)
    await asyncio.wait_for(driver_process.wait_closed(), timeout=10)


async def wait_for_text(path: str, text: str, timeout: float = 5.0) -> str:
    """Poll a file until it contains text, returning its content."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    content = ""
    while loop.time() < deadline:
        with open(path, encoding="utf-8") as f:
            content = f.read()
        if text in content:
            return content
        await asyncio.sleep(0.05)
    return content
