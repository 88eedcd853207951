"""Tests for exec.py - CommandRunner."""

import asyncio
import os
import shlex
import sys

import pytest

from shipyard_common import CommandTimeoutError, ExecutionError
from shipyard_sdk.resolve.exec import CommandRunner


def python_command(code: str) -> str:
    return f"{shlex.quote(sys.executable)} -c {shlex.quote(code)}"


async def wait_for_file(path, timeout=10.0):
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not path.exists() or not path.read_text():
        assert loop.time() < deadline, f"{path} was never written"
        await asyncio.sleep(0.05)


class TestCommandRunner:
    """Tests for CommandRunner.run()."""

    @pytest.mark.asyncio
    async def test_returns_stdout(self, tmp_path):
        """Should return decoded standard output."""
        runner = CommandRunner(str(tmp_path), timeout=30)

        stdout = await runner.run(python_command("print('hello')"))

        assert stdout.strip() == "hello"

    @pytest.mark.asyncio
    async def test_runs_in_directory(self, tmp_path):
        """Commands run with the configured working directory."""
        runner = CommandRunner(str(tmp_path), timeout=30)

        stdout = await runner.run(python_command("import os; print(os.getcwd())"))

        assert stdout.strip() == str(tmp_path.resolve())

    @pytest.mark.asyncio
    async def test_non_zero_exit_fails(self, tmp_path):
        """A non-zero exit code raises ExecutionError with stderr."""
        runner = CommandRunner(str(tmp_path), timeout=30)

        with pytest.raises(ExecutionError) as exc_info:
            await runner.run(python_command("import sys; sys.stderr.write('bad'); sys.exit(3)"))

        assert exc_info.value.exit_code == 3
        assert "bad" in exc_info.value.stderr

    @pytest.mark.asyncio
    async def test_missing_binary_fails(self, tmp_path):
        """A binary that does not exist raises ExecutionError."""
        runner = CommandRunner(str(tmp_path), timeout=30)

        with pytest.raises(ExecutionError) as exc_info:
            await runner.run("shipyard-no-such-binary list --json")

        assert exc_info.value.exit_code is None
        assert "Unable to execute" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_timeout(self, tmp_path):
        """A slow command raises CommandTimeoutError, not ExecutionError."""
        runner = CommandRunner(str(tmp_path), timeout=0.2)

        with pytest.raises(CommandTimeoutError) as exc_info:
            await runner.run(python_command("import time; time.sleep(10)"))

        assert exc_info.value.timeout == 0.2

    @pytest.mark.asyncio
    async def test_output_limit(self, tmp_path):
        """Output above the limit raises ExecutionError."""
        runner = CommandRunner(str(tmp_path), timeout=30, max_output_bytes=10)

        with pytest.raises(ExecutionError) as exc_info:
            await runner.run(python_command("print('x' * 100)"))

        assert "exceeds 10 bytes" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_output_limit_stops_reading(self, tmp_path):
        """Endless output is cut off at the limit instead of waiting for the timeout."""
        runner = CommandRunner(str(tmp_path), timeout=30, max_output_bytes=1024)
        code = "import sys\nwhile True:\n    sys.stdout.write('x' * 4096)\n    sys.stdout.flush()"

        with pytest.raises(ExecutionError) as exc_info:
            await asyncio.wait_for(runner.run(python_command(code)), timeout=15)

        assert "exceeds 1024 bytes" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_non_utf8_output(self, tmp_path):
        """Undecodable output raises ExecutionError carrying the command."""
        runner = CommandRunner(str(tmp_path), timeout=30)
        command = python_command("import sys; sys.stdout.buffer.write(b'\\xff\\xfe')")

        with pytest.raises(ExecutionError) as exc_info:
            await runner.run(command)

        assert exc_info.value.command == command
        assert "not valid UTF-8" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_cancel_kills_process(self, tmp_path):
        """Cancelling run() kills the child process."""
        runner = CommandRunner(str(tmp_path), timeout=30)
        pid_file = tmp_path / "pid"
        code = (
            "import os, time\n"
            f"with open({str(pid_file)!r}, 'w') as f:\n"
            "    f.write(str(os.getpid()))\n"
            "time.sleep(30)"
        )

        task = asyncio.ensure_future(runner.run(python_command(code)))
        await wait_for_file(pid_file)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        with pytest.raises(ProcessLookupError):
            os.kill(int(pid_file.read_text()), 0)
