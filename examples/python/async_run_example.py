#!/usr/bin/env python3
"""
procline Example - Running command lines from asyncio

Runs a few commands concurrently with the async Runner and reports each
outcome, including failures.
"""

import asyncio
import logging
import sys

import procline

logger = logging.getLogger("async_run_example")


def setup_logging():
    """Configure stdout logging for the example."""
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


COMMANDS = [
    "echo hello",
    "sh -c 'sleep 1; echo slept'",
    "sh -c 'echo boom >&2; exit 2'",
    "missing-program",
]


async def run_one(runner: procline.Runner, command_line: str) -> str:
    try:
        output = await runner.run(command_line)
    except procline.ExecError as e:
        return f"failed ({e.status}): {e.stderr.strip()}"
    except procline.SpawnError as e:
        return f"not started: {e.strerror}"
    return f"ok: {output.stdout.strip()}"


async def main():
    runner = procline.Runner()
    results = await asyncio.gather(*(run_one(runner, c) for c in COMMANDS))
    for command_line, result in zip(COMMANDS, results):
        print(f"{command_line!r:40} {result}")


if __name__ == "__main__":
    setup_logging()
    asyncio.run(main())
