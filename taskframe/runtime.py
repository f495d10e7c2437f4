"""A single-threaded runtime built on an asyncio event loop.

Every coroutine spawned on a :class:`Runtime` runs on the thread that drives
the loop, so spawned work never moves between threads.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Coroutine
from typing import Any, TypeVar

T = TypeVar("T")


def default_event_loop() -> asyncio.AbstractEventLoop:
    """Create a fresh event loop with the default configuration."""
    return asyncio.new_event_loop()


class Runtime:
    """Owns an event loop and runs coroutines on the current thread.

    Spawned tasks make progress only while :meth:`block_on` is running. Tasks
    still pending when ``block_on`` returns stay on the loop and continue at
    the next ``block_on`` call.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self.loop = loop if loop is not None else default_event_loop()

    def spawn(self, coro: Coroutine[Any, Any, T]) -> asyncio.Task[T]:
        """Schedule ``coro`` on this runtime and return its task.

        The task can be awaited, or passed to :meth:`block_on`, for its
        result; an exception raised inside it is caught at the task boundary
        and re-raised there.
        """
        return self.loop.create_task(coro)

    def block_on(self, coro: Awaitable[T]) -> T:
        """Run the loop until ``coro`` completes and return its result.

        Other spawned tasks run meanwhile but are not waited for.
        """
        return self.loop.run_until_complete(coro)

    def close(self) -> None:
        """Cancel pending tasks and close the event loop."""
        loop = self.loop
        if loop.is_closed():
            return
        pending = [task for task in asyncio.all_tasks(loop) if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            loop.run_until_complete(asyncio.gather(*pending, return_exceptions=True))
        loop.run_until_complete(loop.shutdown_asyncgens())
        loop.close()

    def __enter__(self) -> Runtime:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Runtime(loop={self.loop!r})"


def spawn(coro: Coroutine[Any, Any, T]) -> asyncio.Task[T]:
    """Spawn ``coro`` as a new task on the event loop running in this thread.

    Raises ``RuntimeError`` if no event loop is running.
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        coro.close()
        raise RuntimeError("no runtime is running on this thread") from None
    return loop.create_task(coro)