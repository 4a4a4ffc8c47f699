"""Periodic trigger driving ``TwitchIRCClient.poll``."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol

from ..constants import POLL_INTERVAL_SECONDS
from ..logs import logger


class PollTimer(Protocol):
    """Anything able to call ``callback`` repeatedly until cancelled."""

    def start(self, callback: Callable[[], None]) -> bool: ...

    def cancel(self) -> None: ...

    @property
    def active(self) -> bool: ...


class AsyncioPollTimer:
    """Re-arming ``call_later`` timer on the running asyncio loop.

    The next tick is scheduled only after the callback returned, so two
    invocations never overlap.
    """

    def __init__(
        self,
        interval: float = POLL_INTERVAL_SECONDS,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self.interval = interval
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None
        self._callback: Callable[[], None] | None = None

    @property
    def active(self) -> bool:
        return self._callback is not None

    def start(self, callback: Callable[[], None]) -> bool:
        self.cancel()
        loop = self._loop
        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                logger.log_event("timer", "no_event_loop", level=logging.WARNING)
                return False
        self._loop = loop
        self._callback = callback
        self._schedule()
        logger.log_event("timer", "armed", level=logging.DEBUG, interval=self.interval)
        return True

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            logger.log_event("timer", "cancelled", level=logging.DEBUG)
        self._handle = None
        self._callback = None

    def _schedule(self) -> None:
        if self._loop is None or self._loop.is_closed():
            self._handle = None
            return
        self._handle = self._loop.call_later(self.interval, self._tick)

    def _tick(self) -> None:
        callback = self._callback
        if callback is None:
            return
        try:
            callback()
        except Exception as e:  # noqa: BLE001
            logger.log_event(
                "timer",
                "poll_error",
                level=logging.ERROR,
                error=str(e),
                error_type=type(e).__name__,
            )
        # cancel() may have run inside the callback
        if self._callback is callback:
            self._schedule()
