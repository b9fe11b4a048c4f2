"""
SyncRunner - Synchronous wrapper for Runner.

Provides a blocking API using greenlet fiber switching. The module-level
run() and run_args() helpers are the simplest way to run one command.
"""

import asyncio
import logging
from typing import Any, Coroutine, Optional, TypeVar

from greenlet import greenlet

from ..exec import Output
from ..options import RunOptions
from ..runner import Runner

logger = logging.getLogger("procline.sync_api")

__all__ = ["SyncRunner", "run", "run_args"]

T = TypeVar("T")


class SyncRunner:
    """
    Synchronous wrapper for Runner.

    This class handles the dispatcher fiber lifecycle and mirrors the
    async Runner API with blocking methods.

    Usage:
        with SyncRunner() as runner:
            output = runner.run("sh -c 'echo hi'")
            print(output.stdout)

    Usage (manual start/stop - for REPL, test fixtures):
        runner = SyncRunner().start()
        try:
            runner.exec("ls", "-la")
        finally:
            runner.stop()

    Architecture:
        - Creates a dispatcher greenlet fiber that runs the event loop
        - User code runs in the main fiber
        - When user calls a sync method, it switches to dispatcher
        - Dispatcher runs the child process to completion
        - When the task completes, callback switches back to user fiber
    """

    def __init__(self, options: Optional[RunOptions] = None) -> None:
        """
        Create a SyncRunner.

        Args:
            options: Default options for every call (per-call options win)
        """
        self._runner = Runner(options)

        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._dispatcher_fiber: Optional[greenlet] = None
        self._started = False

    def __enter__(self) -> "SyncRunner":
        """
        Start the dispatcher fiber and enter context.

        Raises:
            RuntimeError: If already started, or called from within a
                running asyncio loop.
        """
        if self._started:
            raise RuntimeError("SyncRunner already started.")

        try:
            asyncio.get_running_loop()
        except RuntimeError:
            pass
        else:
            raise RuntimeError(
                "Cannot use SyncRunner inside an asyncio loop. "
                "Use the async Runner instead."
            )

        self._loop = asyncio.new_event_loop()

        def greenlet_main() -> None:
            """Dispatcher fiber entry point: run the loop until stop()."""
            self._loop.run_forever()

        self._dispatcher_fiber = greenlet(greenlet_main)

        g_self = greenlet.getcurrent()

        def on_ready():
            """Switch back to the user fiber once the dispatcher is running."""
            g_self.switch()

        self._loop.call_soon(on_ready)
        self._dispatcher_fiber.switch()
        # Control returns here after dispatcher calls on_ready()

        self._started = True
        logger.debug("sync runner started")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Stop the dispatcher fiber and close the event loop."""
        if not self._started:
            return
        self._started = False

        # Signal the event loop to stop, then switch to let it finish cleanly
        self._loop.call_soon(self._loop.stop)
        self._dispatcher_fiber.switch()

        try:
            tasks = asyncio.all_tasks(self._loop)
            for t in [t for t in tasks if not t.done()]:
                t.cancel()
            self._loop.run_until_complete(self._loop.shutdown_asyncgens())
        finally:
            self._loop.close()
        logger.debug("sync runner stopped")

    def start(self) -> "SyncRunner":
        """
        Start the runner (non-context-manager usage).

        Returns:
            Self, with dispatcher fiber running.
        """
        return self.__enter__()

    def stop(self) -> None:
        """Stop the runner (non-context-manager usage)."""
        self.__exit__(None, None, None)

    @property
    def options(self) -> RunOptions:
        return self._runner.options

    def _require_started(self) -> None:
        """Raise RuntimeError if runner not started."""
        if not self._started:
            raise RuntimeError(
                "SyncRunner not started. Use 'with SyncRunner() as runner:' "
                "or call 'SyncRunner.start()' first."
            )

    def _sync(self, coro: Coroutine[Any, Any, T]) -> T:
        """
        Run a coroutine on the dispatcher fiber and wait for its result.

        The coroutine becomes a task on our loop. We switch to the
        dispatcher until the task is done; its done callback switches
        back here.
        """
        __tracebackhide__ = True  # Hide from pytest tracebacks

        user_fiber = greenlet.getcurrent()
        task = self._loop.create_task(coro)
        task.add_done_callback(lambda _: user_fiber.switch())
        while not task.done():
            self._dispatcher_fiber.switch()
        return task.result()

    def run(self, command_line: str, options: Optional[RunOptions] = None) -> Output:
        """
        Split a command line and run it, blocking until it exits.

        See Runner.run() for the errors raised.
        """
        self._require_started()
        return self._sync(self._runner.run(command_line, options=options))

    def exec(
        self,
        program: str,
        *args: str,
        options: Optional[RunOptions] = None,
    ) -> Output:
        """
        Run a program with already split arguments, blocking until it exits.

        See Runner.exec() for the errors raised.
        """
        self._require_started()
        return self._sync(self._runner.exec(program, *args, options=options))

    def __repr__(self) -> str:
        state = "started" if self._started else "stopped"
        return f"SyncRunner({self._runner.options!r}, {state})"


def run(command_line: str, options: Optional[RunOptions] = None) -> Output:
    """
    Run a command line and wait for it.

    Args:
        command_line: Program and arguments, quoted like in ``sh``
        options: How to set up the child process

    Returns:
        Output with status 0 and the captured stdout/stderr

    Raises:
        CommandLineError: If the command line cannot be split
        SpawnError: If the process cannot be started
        ExecError: If the process exits unsuccessfully (carries the Output)
        DecodeError: If the output is not valid text

    Example:
        >>> run("echo hi").stdout
        'hi\\n'
    """
    with SyncRunner(options) as runner:
        return runner.run(command_line)


def run_args(program: str, *args: str, options: Optional[RunOptions] = None) -> Output:
    """Like run(), but with the program and arguments already split."""
    with SyncRunner(options) as runner:
        return runner.exec(program, *args)
