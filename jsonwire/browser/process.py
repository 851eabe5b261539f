"""Driver process management."""

import asyncio
import signal
import sys
from typing import BinaryIO

from jsonwire.browser.probe import probe_port
from jsonwire.browser.specs import DriverSpec
from jsonwire.models import DriverOptions
from jsonwire.utils.logging import get_logger
from jsonwire.wire.errors import (
    DriverAlreadyRunningError,
    DriverNotRunningError,
    DriverStartError,
    PortProbeTimeoutError,
)

logger = get_logger(__name__)

_CHUNK_SIZE = 4096


async def _pump(reader: asyncio.StreamReader, sink: BinaryIO) -> None:
    """Copy a child output stream into a sink until EOF."""
    while True:
        chunk = await reader.read(_CHUNK_SIZE)
        if not chunk:
            break
        sink.write(chunk)
        sink.flush()


class DriverProcess:
    """Manages the lifecycle of one driver binary."""

    def __init__(self, spec: DriverSpec, path: str, options: DriverOptions) -> None:
        self.spec = spec
        self.path = path
        self.options = options
        self._process: asyncio.subprocess.Process | None = None
        self._log_file: BinaryIO | None = None
        self._pump_tasks: list[asyncio.Task[None]] = []
        self._drain_task: asyncio.Task[None] | None = None
        self._base_url: str | None = None

    @property
    def running(self) -> bool:
        """Whether the driver process has been started and not stopped."""
        return self._process is not None

    @property
    def pid(self) -> int | None:
        """PID of the driver process, if running."""
        return self._process.pid if self._process else None

    @property
    def base_url(self) -> str | None:
        """Driver URL, only set while running."""
        return self._base_url

    def build_args(self) -> list[str]:
        """Command line used to launch the driver."""
        return [self.path, *self.spec.build_args(self.options)]

    async def start(self) -> str:
        """
        Launch the driver and wait for its port to accept connections.

        Returns:
            Base URL of the driver

        Raises:
            DriverAlreadyRunningError: If the driver is already running
            DriverStartError: If the process could not be launched
            PortProbeTimeoutError: If the port did not open in time
        """
        name = self.spec.name
        failure = f"{name} start failed: "
        if self._process is not None:
            raise DriverAlreadyRunningError(failure + f"{name} already running")

        await self._collect_drain()

        if self.options.log_path:
            try:
                with open(self.options.log_path, "ab"):
                    pass
            except OSError as e:
                raise DriverStartError(
                    failure + f"unable to write in log path: {e}"
                ) from e

        base_url = f"http://localhost:{self.options.port}{self.options.base_url}"
        args = self.build_args()

        log_file: BinaryIO | None = None
        if self.options.log_file:
            try:
                log_file = open(self.options.log_file, "wb")
            except OSError as e:
                raise DriverStartError(
                    failure + f"unable to open log file: {e}"
                ) from e

        logger.info(
            "Launching driver",
            driver=name,
            args=args,
            log_file=self.options.log_file,
        )

        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            if log_file:
                log_file.close()
            raise DriverStartError(failure + str(e)) from e

        self._process = process
        self._log_file = log_file

        assert process.stdout is not None and process.stderr is not None
        stdout_sink = log_file or sys.stdout.buffer
        stderr_sink = log_file or sys.stderr.buffer
        self._pump_tasks = [
            asyncio.create_task(_pump(process.stdout, stdout_sink)),
            asyncio.create_task(_pump(process.stderr, stderr_sink)),
        ]

        try:
            await probe_port(self.options.port, self.options.start_timeout)
        except BaseException as e:
            # Covers cancellation too, the child must not outlive a failed start
            if isinstance(e, PortProbeTimeoutError):
                logger.error(
                    "Driver port never opened, killing driver",
                    driver=name,
                    pid=process.pid,
                    port=self.options.port,
                )
            else:
                logger.warning(
                    "Driver start interrupted, killing driver",
                    driver=name,
                    pid=process.pid,
                    error=repr(e),
                )
            try:
                process.kill()
            except ProcessLookupError:
                pass  # Already exited
            await process.wait()
            await self._release()
            raise

        self._base_url = base_url
        logger.info("Driver started", driver=name, pid=process.pid, url=base_url)
        return base_url

    async def stop(self) -> None:
        """
        Signal the driver to exit and release its resources.

        The process is interrupted, not killed, and stop does not wait for it
        to exit. Its remaining output keeps being copied until the streams
        close; the log file is closed once copying ends. Use wait_closed to
        wait for that.

        Raises:
            DriverNotRunningError: If the driver is not running
        """
        process = self._process
        if process is None:
            raise DriverNotRunningError(f"stop failed: {self.spec.name} not running")

        logger.info("Stopping driver", driver=self.spec.name, pid=process.pid)

        try:
            if sys.platform == "win32":
                # SIGINT cannot be sent to a child process on Windows
                process.terminate()
            else:
                process.send_signal(signal.SIGINT)
        except ProcessLookupError:
            logger.debug("Driver process already exited", pid=process.pid)
        finally:
            self._drain_task = asyncio.create_task(
                self._drain(self._pump_tasks, self._log_file)
            )
            self._pump_tasks = []
            self._log_file = None
            self._process = None
            self._base_url = None

    async def wait_closed(self) -> None:
        """Wait until output of a stopped driver is copied and the log is closed."""
        task = self._drain_task
        if task is not None:
            await asyncio.shield(task)

    @staticmethod
    async def _drain(
        pump_tasks: list[asyncio.Task[None]], log_file: BinaryIO | None
    ) -> None:
        """Let output copying reach EOF, then close the log file."""
        try:
            await asyncio.gather(*pump_tasks, return_exceptions=True)
        finally:
            for task in pump_tasks:
                task.cancel()
            if log_file is not None:
                log_file.close()

    async def _collect_drain(self) -> None:
        """Finish output copying left over from the previous run."""
        task = self._drain_task
        self._drain_task = None
        if task is None:
            return
        if not task.done():
            logger.warning("Previous driver output still open, closing it")
            task.cancel()
        await asyncio.gather(task, return_exceptions=True)

    async def _release(self) -> None:
        """Cancel output copying, close the log file and forget the process."""
        for task in self._pump_tasks:
            task.cancel()
        if self._pump_tasks:
            await asyncio.gather(*self._pump_tasks, return_exceptions=True)
        self._pump_tasks = []

        if self._log_file is not None:
            self._log_file.close()
            self._log_file = None

        self._process = None
        self._base_url = None
