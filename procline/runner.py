"""
Runner - async core for running external commands.

Spawns the program, drains stdout and stderr while waiting for it to
exit, decodes both streams and turns an unsuccessful exit into an
ExecError that still carries the captured output.
"""

import asyncio
import errno
import logging
from typing import Optional

from . import cmdline
from .errors import DecodeError, ExecError, SpawnError
from .exec import Output
from .options import RunOptions

# Configure logger
logger = logging.getLogger("procline.runner")

__all__ = ['Runner']


class Runner:
    """
    Runs commands as child processes.

    Each call is independent: the runner only remembers its default
    options, never any process state.

    Usage:
        >>> runner = Runner(RunOptions(working_dir="/tmp"))
        >>> output = await runner.run("sh -c 'echo hi'")
        >>> output.stdout
        'hi\\n'
    """

    def __init__(self, options: Optional[RunOptions] = None):
        """
        Create a runner.

        Args:
            options: Default options for every call (per-call options win)
        """
        self._options = options if options is not None else RunOptions()

    @property
    def options(self) -> RunOptions:
        return self._options

    async def run(
            self,
            command_line: str,
            options: Optional[RunOptions] = None,
    ) -> Output:
        """
        Split a command line and run it.

        Args:
            command_line: Program and arguments, quoted like in ``sh``
            options: Options for this call only

        Returns:
            Output of the successful process

        Raises:
            CommandLineError: If the command line cannot be split
            SpawnError: If the process cannot be started
            ExecError: If the process exits unsuccessfully
            DecodeError: If the output is not valid text
        """
        program, args = cmdline.parse(command_line)
        return await self.exec(program, *args, options=options)

    async def exec(
            self,
            program: str,
            *args: str,
            options: Optional[RunOptions] = None,
    ) -> Output:
        """
        Run a program with already split arguments.

        Args:
            program: Program name (looked up in PATH) or path
            *args: Arguments to the program
            options: Options for this call only

        Returns:
            Output of the successful process

        Examples:
            Simple execution::

                output = await runner.exec('ls', '-l', '-a')
                print(output.stdout)

            Inspecting a failure::

                try:
                    await runner.exec('sh', '-c', 'exit 3')
                except ExecError as e:
                    print(e.status, e.stderr)
        """
        opts = options if options is not None else self._options

        for word in (program, *args):
            if "\0" in word:
                raise SpawnError(
                    program, args,
                    OSError(errno.EINVAL, f"embedded null byte in {word!r}"),
                )

        logger.debug(f"spawning {program!r} with args {list(args)!r}")
        try:
            process = await asyncio.create_subprocess_exec(
                program,
                *args,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=opts.working_dir,
                env=opts.child_env(),
            )
        except OSError as e:
            raise SpawnError(program, args, e) from e

        try:
            # communicate() reads both pipes concurrently with wait()
            stdout_data, stderr_data = await process.communicate()
        finally:
            if process.returncode is None:
                logger.debug(f"killing unfinished process {process.pid}")
                process.kill()
                await process.wait()

        status = process.returncode
        logger.debug(f"exec finish, pid: {process.pid}, status: {status}")

        decode_error = None
        text = {}
        for stream, data in (("stdout", stdout_data), ("stderr", stderr_data)):
            try:
                text[stream] = data.decode(opts.encoding, errors=opts.errors)
            except UnicodeDecodeError as e:
                if decode_error is None:
                    decode_error = DecodeError(
                        program, stream, status, e, stdout_data, stderr_data,
                    )
                text[stream] = data.decode(opts.encoding, errors="replace")

        output = Output(status=status, stdout=text["stdout"], stderr=text["stderr"])
        # An unsuccessful exit outranks undecodable output
        if not output.success:
            raise ExecError(program, args, output, decode_error) from decode_error
        if decode_error is not None:
            raise decode_error
        return output
