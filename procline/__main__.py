"""
Command-line front end: ``python -m procline "COMMAND LINE"``.

Prints the child's stdout and stderr and exits with a status that mirrors
the child's.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from . import __version__, run
from .constants import (
    DEFAULT_ENCODING,
    EXIT_NOT_EXECUTABLE,
    EXIT_NOT_FOUND,
    EXIT_SIGNAL_BASE,
    EXIT_USAGE,
)
from .errors import CommandLineError, DecodeError, ExecError, SpawnError
from .exec import Output
from .options import RunOptions

logger = logging.getLogger("procline")


def setup_logging(verbose: bool) -> None:
    """Configure stderr logging for the CLI."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def _parse_env(values: List[str], parser: argparse.ArgumentParser) -> dict:
    env = {}
    for item in values:
        name, sep, value = item.partition("=")
        if not sep or not name:
            parser.error(f"--env expects NAME=VALUE, got {item!r}")
        env[name] = value
    return env


def _exit_status(status: int) -> int:
    if status < 0:
        return EXIT_SIGNAL_BASE - status
    return status


def _echo(output: Output) -> None:
    sys.stdout.write(output.stdout)
    sys.stdout.flush()
    sys.stderr.write(output.stderr)
    sys.stderr.flush()


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="procline",
        description="Run a command line without a shell and report its output",
    )
    parser.add_argument("command_line", help="Program and arguments, quoted like in sh")
    parser.add_argument("--cwd", help="Working directory of the command")
    parser.add_argument(
        "--env",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Set an environment variable (repeatable)",
    )
    parser.add_argument("--clear-env", action="store_true", help="Start from an empty environment")
    parser.add_argument("--encoding", default=DEFAULT_ENCODING, help="Output encoding (default: utf-8)")
    parser.add_argument("--lossy", action="store_true", help="Replace undecodable output instead of failing")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        options = RunOptions(
            working_dir=args.cwd,
            env=_parse_env(args.env, parser) or None,
            clear_env=args.clear_env,
            encoding=args.encoding,
            errors="replace" if args.lossy else "strict",
        )
    except ValueError as e:
        parser.error(str(e))

    # A missing directory would otherwise look like a missing program
    if args.cwd is not None and not os.path.isdir(args.cwd):
        parser.error(f"--cwd: not a directory: {args.cwd!r}")

    logger.debug(f"running {args.command_line!r} with {options!r}")
    try:
        output = run(args.command_line, options)
    except CommandLineError as e:
        print(f"procline: {e}", file=sys.stderr)
        return EXIT_USAGE
    except SpawnError as e:
        print(f"procline: {e}", file=sys.stderr)
        if isinstance(e.os_error, FileNotFoundError):
            return EXIT_NOT_FOUND
        return EXIT_NOT_EXECUTABLE
    except ExecError as e:
        _echo(e.output)
        return _exit_status(e.status)
    except DecodeError as e:
        print(f"procline: {e}", file=sys.stderr)
        return 1

    _echo(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
