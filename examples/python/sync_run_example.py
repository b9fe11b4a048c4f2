#!/usr/bin/env python3
"""
procline Example - Running command lines (Synchronous)

Demonstrates core procline features using the blocking API:
- Running a command line and reading its output
- Separate stdout and stderr handling
- Environment variables and working directory
- Error handling and exit codes
- Several commands on one SyncRunner
"""

import logging
import sys

import procline

logger = logging.getLogger("sync_run_example")


def setup_logging():
    """Configure stdout logging for the example."""
    logging.basicConfig(
        level=logging.ERROR,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def example_basic():
    """Example 1: Basic command execution."""
    print("\n=== Example 1: Basic Command Execution ===")

    output = procline.run("ls -lh /")
    print(output.stdout)
    print(f"Status: {output.status}")


def example_stdout_stderr():
    """Example 2: Separate stdout and stderr."""
    print("\n\n=== Example 2: Separate stdout and stderr ===")

    output = procline.run("""sh -c 'echo "to stdout" && echo "to stderr" >&2'""")

    print(f"Status: {output.status}")
    print(f"Stdout: '{output.stdout.strip()}'")
    print(f"Stderr: '{output.stderr.strip()}'")


def example_environment_and_cwd():
    """Example 3: Environment variables and working directory."""
    print("\n\n=== Example 3: Environment and Working Directory ===")

    opts = procline.RunOptions(
        working_dir="/tmp",
        env={"USER": "alice", "PROJECT": "data-pipeline"},
    )
    output = procline.run("sh -c 'pwd; echo $USER $PROJECT'", opts)
    for line in output.stdout.splitlines():
        print(f"  {line}")


def example_error_handling():
    """Example 4: Error handling."""
    print("\n\n=== Example 4: Error Handling ===")

    print("\nRunning command that fails:")
    try:
        procline.run("sh -c 'echo \"disk full\" >&2; exit 3'")
    except procline.ExecError as e:
        print(f"Command failed as expected with status {e.status}: {e.stderr.strip()}")

    print("\nRunning a program that does not exist:")
    try:
        procline.run("no-such-program --help")
    except procline.SpawnError as e:
        print(f"Could not start: {e.strerror}")

    print("\nRunning a malformed command line:")
    try:
        procline.run("echo 'oops")
    except procline.CommandLineError as e:
        print(f"Bad command line: {e.reason} at position {e.position}")


def example_runner():
    """Example 5: Several commands on one runner."""
    print("\n\n=== Example 5: SyncRunner ===")

    with procline.SyncRunner(procline.RunOptions(env={"LC_ALL": "C"})) as runner:
        for line in ("uname -s", "date -u +%Y", "sh -c 'echo $LC_ALL'"):
            print(f"  {line!r} -> {runner.run(line).stdout.strip()}")


def main():
    """Run all examples."""
    print("procline Examples (Synchronous)")
    print("=" * 60)

    example_basic()
    example_stdout_stderr()
    example_environment_and_cwd()
    example_error_handling()
    example_runner()

    print("\n" + "=" * 60)
    print("All examples completed!")


if __name__ == "__main__":
    setup_logging()
    logger.info("Python logging configured; runtime logs will emit to stdout.")
    main()
