"""
procline error types.

Provides a hierarchy of exceptions for the different stages of a run:
tokenizing the command line, spawning the process and checking how it
finished. Catch ``ProclineError`` to handle all of them at once.
"""

from typing import TYPE_CHECKING, Optional, Sequence

if TYPE_CHECKING:
    from .exec import Output

__all__ = [
    'ProclineError',
    'CommandLineError',
    'NoCommandError',
    'SpawnError',
    'ExecError',
    'DecodeError',
]


class ProclineError(Exception):
    """Base exception for all procline errors."""
    pass


class CommandLineError(ProclineError):
    """
    Raised when a command line cannot be split into arguments.

    Attributes:
        command_line: The offending input
        reason: What is wrong with it
        position: Index in ``command_line`` where the problem was found
    """
    def __init__(self, command_line: str, reason: str, position: int):
        self.command_line = command_line
        self.reason = reason
        self.position = position
        super().__init__(f"{reason} at position {position}: {command_line!r}")


class NoCommandError(CommandLineError):
    """Raised when a command line holds no program to run."""
    def __init__(self, command_line: str):
        super().__init__(command_line, "no command given", len(command_line))


class SpawnError(ProclineError):
    """
    Raised when the OS refuses to start the process.

    No output exists for such a process.

    Attributes:
        program: The program that could not be started
        args_list: Its arguments
        os_error: The underlying OSError
    """
    def __init__(self, program: str, args: Sequence[str], os_error: OSError):
        self.program = program
        self.args_list = list(args)
        self.os_error = os_error
        super().__init__(f"Failed to start '{program}': {os_error}")

    @property
    def errno(self) -> Optional[int]:
        return self.os_error.errno

    @property
    def strerror(self) -> Optional[str]:
        return self.os_error.strerror


class ExecError(ProclineError):
    """
    Raised when a command runs but does not finish successfully
    (non-zero exit code or killed by a signal).

    The captured output is kept so diagnostics are never lost. A stream
    that was not valid text is still included, with undecodable bytes
    replaced, and the decoding problem is kept in ``decode_error``.

    Attributes:
        program: The program that failed
        args_list: Its arguments
        output: Status and captured stdout/stderr
        decode_error: DecodeError for undecodable output, or None
    """
    def __init__(
            self,
            program: str,
            args: Sequence[str],
            output: "Output",
            decode_error: Optional["DecodeError"] = None,
    ):
        self.program = program
        self.args_list = list(args)
        self.output = output
        self.decode_error = decode_error
        if output.signal is not None:
            how = f"was killed by signal {output.signal}"
        else:
            how = f"failed with exit code {output.status}"
        super().__init__(
            f"Command '{program}' {how}: "
            f"stdout: {output.stdout!r} stderr: {output.stderr!r}"
        )

    @property
    def status(self) -> int:
        return self.output.status

    @property
    def stdout(self) -> str:
        return self.output.stdout

    @property
    def stderr(self) -> str:
        return self.output.stderr


class DecodeError(ProclineError):
    """
    Raised when a successful command's output is not valid text in the
    requested encoding.

    Both raw streams are kept, whichever one failed to decode.

    Attributes:
        program: The program that produced the output
        stream: ``"stdout"`` or ``"stderr"``, the first stream that failed
        status: Exit status of the process
        unicode_error: The underlying UnicodeDecodeError
        stdout_data: Raw bytes of stdout
        stderr_data: Raw bytes of stderr
    """
    def __init__(
            self,
            program: str,
            stream: str,
            status: int,
            unicode_error: UnicodeDecodeError,
            stdout_data: bytes,
            stderr_data: bytes,
    ):
        self.program = program
        self.stream = stream
        self.status = status
        self.unicode_error = unicode_error
        self.stdout_data = stdout_data
        self.stderr_data = stderr_data
        super().__init__(
            f"Cannot decode {stream} of '{program}' "
            f"(exit status {status}): {unicode_error}"
        )

    @property
    def data(self) -> bytes:
        """Raw bytes of the stream that failed to decode."""
        return self.stdout_data if self.stream == "stdout" else self.stderr_data
