"""
External Command Execution
==========================

Runs package-manager commands in a given working directory and returns
their standard output.
"""

import asyncio
import shlex
from typing import Optional, Protocol, Tuple

from shipyard_common import CommandTimeoutError, ExecutionError, PackageManagerDefaults
from shipyard_common.logger import get_logger

logger = get_logger("sdk.exec")

_CHUNK_SIZE = 64 * 1024


class Runner(Protocol):
    """Anything able to run a command line and return its stdout."""

    async def run(self, command: str) -> str:
        ...


class CommandRunner:
    """
    Run commands with a working directory, a time bound and an output cap.

    Example:
        >>> runner = CommandRunner("/project/examples/assembly", timeout=60)
        >>> stdout = await runner.run("yarn list --json --prod")
    """

    def __init__(
        self,
        directory: str,
        timeout: Optional[float] = PackageManagerDefaults.TIMEOUT_SECONDS,
        max_output_bytes: int = PackageManagerDefaults.MAX_OUTPUT_BYTES,
    ):
        """
        Args:
            directory: Working directory for every command
            timeout: Seconds before the process is killed; None waits forever
            max_output_bytes: Largest accepted stdout; reading stops and the
                process is killed once it is passed
        """
        self.directory = directory
        self.timeout = timeout
        self.max_output_bytes = max_output_bytes

    async def run(self, command: str) -> str:
        """
        Run a command and return its decoded stdout.

        The process is killed whenever the call ends before it exits,
        including on cancellation.

        Raises:
            ExecutionError: If the process cannot start, exits non-zero, prints
                too much or prints something that is not UTF-8
            CommandTimeoutError: If the process outlives the timeout
        """
        args = shlex.split(command)
        logger.debug("Running command", command=command, cwd=self.directory)

        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                cwd=self.directory,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise ExecutionError(
                f"Unable to execute the command {command}: {e}",
                command=command,
            ) from e

        try:
            stdout, stderr = await asyncio.wait_for(
                self._read_output(process, command),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            raise CommandTimeoutError(command, self.timeout or 0)
        finally:
            if process.returncode is None:
                await _kill(process)

        stderr_text = stderr.decode("utf-8", errors="replace")
        if process.returncode != 0:
            raise ExecutionError(
                f"Invalid exit code {process.returncode} for command {command}",
                command=command,
                exit_code=process.returncode,
                stderr=stderr_text,
            )

        try:
            return stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ExecutionError(
                f"Output of command {command} is not valid UTF-8: {e}",
                command=command,
                exit_code=process.returncode,
                stderr=stderr_text,
            ) from e

    async def _read_output(
        self, process: asyncio.subprocess.Process, command: str
    ) -> Tuple[bytes, bytes]:
        """Read stdout in chunks, failing as soon as it passes max_output_bytes."""
        stderr_task = asyncio.ensure_future(process.stderr.read())
        try:
            stdout = bytearray()
            while True:
                chunk = await process.stdout.read(_CHUNK_SIZE)
                if not chunk:
                    break
                stdout.extend(chunk)
                if len(stdout) > self.max_output_bytes:
                    raise ExecutionError(
                        f"Output of command {command} exceeds {self.max_output_bytes} bytes",
                        command=command,
                    )
            stderr = await stderr_task
            await process.wait()
        finally:
            if not stderr_task.done():
                stderr_task.cancel()
                await asyncio.gather(stderr_task, return_exceptions=True)
        return bytes(stdout), stderr


async def _kill(process: asyncio.subprocess.Process) -> None:
    try:
        process.kill()
    except ProcessLookupError:
        # Already exited, only the reaping is left
        pass
    # Drain both pipes so the exit can be reaped
    await process.communicate()
