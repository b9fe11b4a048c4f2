"""
procline - run a shell-like command line as a child process.

Splits the command line with sh quoting rules, runs the program without a
shell, waits for it and returns its captured output. Unsuccessful exits
raise ExecError, which carries the same output.
"""

from .cmdline import join, parse, quote, split
from .errors import (
    CommandLineError,
    DecodeError,
    ExecError,
    NoCommandError,
    ProclineError,
    SpawnError,
)
from .exec import Output
from .options import RunOptions
from .runner import Runner
from .sync_api import SyncRunner, run, run_args

__all__ = [
    # Entry points
    "run",
    "run_args",
    "Runner",
    "SyncRunner",
    # Data types
    "Output",
    "RunOptions",
    # Command line helpers
    "split",
    "parse",
    "quote",
    "join",
    # Error types
    "ProclineError",
    "CommandLineError",
    "NoCommandError",
    "SpawnError",
    "ExecError",
    "DecodeError",
]

# Get version from package metadata
try:
    from importlib.metadata import version, PackageNotFoundError
    __version__ = version("procline")
except PackageNotFoundError:
    # Package not installed (e.g., development mode)
    __version__ = "0.0.0+dev"
