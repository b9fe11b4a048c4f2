"""
procline Sync API - Synchronous wrappers using greenlet fiber switching.

This module provides blocking wrappers for the async Runner using
greenlet fiber switching.

Architecture:
- A dispatcher fiber runs the asyncio event loop
- User code runs in the main fiber
- SyncRunner._sync() switches between fibers to execute async operations

Usage:
    import procline

    # One-shot
    output = procline.run("sh -c 'echo hi'")

    # Several commands on one event loop
    with procline.SyncRunner() as runner:
        runner.run("make")
        runner.exec("ls", "-la")

Note:
    This API cannot be used from within an async context (e.g., inside
    an async function or when an event loop is already running).
    Use the async Runner in those cases.
"""

from ._runner import SyncRunner, run, run_args

__all__ = [
    # Entry points
    "run",
    "run_args",
    "SyncRunner",
]
