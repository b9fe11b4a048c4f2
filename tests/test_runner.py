"""
Integration tests for the async Runner.

These tests spawn real processes through a POSIX sh.
"""

from __future__ import annotations

import asyncio
import errno
import os
import shutil

import pytest

import procline
from procline import ExecError, RunOptions, SpawnError

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(shutil.which("sh") is None, reason="POSIX sh not available"),
]


class TestRunnerExec:
    """Test command execution with split arguments."""

    @pytest.mark.asyncio
    async def test_basic_exec(self, runner):
        """Test basic command execution."""
        output = await runner.exec("echo", "hello")
        assert output.status == 0
        assert output.stdout == "hello\n"
        assert output.stderr == ""

    @pytest.mark.asyncio
    async def test_exec_stderr(self, runner):
        """Test that stderr is captured separately."""
        output = await runner.exec("sh", "-c", "echo error >&2")
        assert output.stdout == ""
        assert output.stderr == "error\n"

    @pytest.mark.asyncio
    async def test_stdin_is_closed(self, runner):
        """Test that a child reading stdin gets EOF instead of blocking."""
        output = await runner.exec("cat")
        assert output.stdout == ""


class TestRunnerRun:
    """Test command execution from a command line."""

    @pytest.mark.asyncio
    async def test_run_stdout(self, runner):
        """Test quoted arguments reach the program intact."""
        output = await runner.run("sh -c 'echo \"1 2 3 4\"'")
        assert output.stdout == "1 2 3 4\n"
        assert output.stderr == ""

    @pytest.mark.asyncio
    async def test_run_failure(self, runner):
        """Test a failing command raises ExecError with its output."""
        with pytest.raises(ExecError) as exc_info:
            await runner.run("sh -c 'echo out; echo error >&2; exit 1'")
        err = exc_info.value
        assert err.status == 1
        assert err.stdout == "out\n"
        assert err.stderr == "error\n"

    @pytest.mark.asyncio
    async def test_run_killed_by_signal(self, runner):
        """Test a signal death is reported as negative status."""
        with pytest.raises(ExecError) as exc_info:
            await runner.run("sh -c 'kill -9 $$'")
        assert exc_info.value.output.signal == 9

    @pytest.mark.asyncio
    async def test_spawn_failure(self, runner):
        """Test a missing program raises SpawnError."""
        with pytest.raises(SpawnError) as exc_info:
            await runner.run("this-binary-does-not-exist-xyz")
        assert isinstance(exc_info.value.os_error, FileNotFoundError)
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    @pytest.mark.asyncio
    async def test_null_byte_in_argument(self, runner):
        """Test an argument containing NUL fails like any other spawn failure."""
        with pytest.raises(SpawnError) as exc_info:
            await runner.exec("echo", "a\0b")
        assert exc_info.value.errno == errno.EINVAL
        assert exc_info.value.program == "echo"

    @pytest.mark.asyncio
    async def test_malformed_command_line(self, runner):
        """Test tokenizer errors surface before anything is spawned."""
        with pytest.raises(procline.CommandLineError):
            await runner.run("echo 'unterminated")


class TestRunnerOptions:
    """Test options applied to the child."""

    @pytest.mark.asyncio
    async def test_working_dir(self, tmp_path):
        """Test the child runs in the configured directory."""
        runner = procline.Runner(RunOptions(working_dir=tmp_path))
        output = await runner.run("pwd")
        assert os.path.samefile(output.stdout.strip(), tmp_path)

    @pytest.mark.asyncio
    async def test_env_override(self, runner):
        """Test env entries reach the child."""
        opts = RunOptions(env={"PROCLINE_TEST": "value 1"})
        output = await runner.run("sh -c 'echo \"$PROCLINE_TEST\"'", options=opts)
        assert output.stdout == "value 1\n"

    @pytest.mark.asyncio
    async def test_clear_env(self, runner, monkeypatch):
        """Test clear_env hides the parent's variables."""
        monkeypatch.setenv("PROCLINE_PARENT", "parent")
        sh = os.path.realpath(shutil.which("sh"))
        opts = RunOptions(clear_env=True, env={"ONLY": "me"})
        output = await runner.exec(
            sh, "-c", 'echo "${PROCLINE_PARENT:-unset} $ONLY"', options=opts,
        )
        assert output.stdout == "unset me\n"

    @pytest.mark.asyncio
    async def test_strict_decoding(self, runner):
        """Test undecodable output is reported."""
        with pytest.raises(procline.DecodeError) as exc_info:
            await runner.exec("printf", "\\377\\376")
        assert exc_info.value.stream == "stdout"
        assert exc_info.value.data == b"\xff\xfe"

    @pytest.mark.asyncio
    async def test_strict_decoding_keeps_other_stream(self, runner):
        """Test a successful run with undecodable stderr keeps both raw streams."""
        with pytest.raises(procline.DecodeError) as exc_info:
            await runner.exec("sh", "-c", "echo ok; printf '\\377' >&2")
        assert exc_info.value.stream == "stderr"
        assert exc_info.value.stdout_data == b"ok\n"
        assert exc_info.value.stderr_data == b"\xff"

    @pytest.mark.asyncio
    async def test_failure_with_undecodable_output(self, runner):
        """Test an unsuccessful exit is reported even when output is not text."""
        with pytest.raises(ExecError) as exc_info:
            await runner.exec("sh", "-c", "printf '\\377'; echo diag >&2; exit 3")
        err = exc_info.value
        assert err.status == 3
        assert err.stderr == "diag\n"
        assert err.stdout == "\ufffd"
        assert err.decode_error.stream == "stdout"
        assert err.decode_error.stdout_data == b"\xff"
        assert err.__cause__ is err.decode_error

    @pytest.mark.asyncio
    async def test_lossy_decoding(self, runner):
        """Test errors='replace' substitutes undecodable bytes."""
        opts = RunOptions(errors="replace")
        output = await runner.exec("printf", "a\\377b", options=opts)
        assert output.stdout == "a\ufffdb"


class TestRunnerConcurrency:
    """Test pipe draining and independent calls."""

    @pytest.mark.asyncio
    async def test_large_output_on_both_streams(self, runner):
        """Test a child filling both pipes does not deadlock."""
        script = (
            "i=0; while [ $i -lt 2000 ]; do "
            "echo 0123456789012345678901234567890123456789012345678901234567890123456789; "
            "echo 0123456789012345678901234567890123456789012345678901234567890123456789 >&2; "
            "i=$((i+1)); done"
        )
        output = await asyncio.wait_for(runner.exec("sh", "-c", script), timeout=60)
        assert len(output.stdout) == 2000 * 71
        assert len(output.stderr) == 2000 * 71

    @pytest.mark.asyncio
    async def test_concurrent_runs(self, runner):
        """Test several calls at once stay independent."""
        outputs = await asyncio.gather(*(runner.exec("echo", str(i)) for i in range(5)))
        assert [o.stdout for o in outputs] == [f"{i}\n" for i in range(5)]

    @pytest.mark.asyncio
    async def test_cancel_kills_child(self, runner):
        """Test cancelling a run does not leave the child running."""
        task = asyncio.ensure_future(runner.exec("sleep", "30"))
        await asyncio.sleep(0.5)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
