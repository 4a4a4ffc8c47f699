"""Small helpers shared by the event surfaces."""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Callable

# Strong references so scheduled handler tasks are not garbage collected
_BACKGROUND_TASKS: set[asyncio.Future[object]] = set()


def schedule_if_awaitable(
    result: object, on_error: Callable[[BaseException], None] | None = None
) -> bool:
    """Hand an awaitable handler result to the running loop.

    Plain results need nothing and return True. Returns False when ``result``
    is awaitable but no loop is running; a dropped coroutine is closed so it
    does not warn about never being awaited. ``on_error`` receives the
    exception of a scheduled task that failed.
    """
    if not inspect.isawaitable(result):
        return True
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        if inspect.iscoroutine(result):
            result.close()
        return False
    task = asyncio.ensure_future(result)
    _BACKGROUND_TASKS.add(task)

    def _done(fut: asyncio.Future[object]) -> None:
        _BACKGROUND_TASKS.discard(fut)
        if fut.cancelled():
            return
        exc = fut.exception()
        if exc is not None and on_error is not None:
            on_error(exc)

    task.add_done_callback(_done)
    return True
