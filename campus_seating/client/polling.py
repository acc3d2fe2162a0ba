from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Set

logger = logging.getLogger(__name__)


class PeriodicTask:
    """Run ``callback`` immediately and then every ``interval`` seconds.

    Each tick runs as its own task so a slow response never delays the
    timer. ``cancel()`` stops the timer only; ticks already in flight run
    to completion and callers decide whether their result still applies.
    """

    def __init__(self, callback: Callable[[], Awaitable[None]], interval: float) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.interval = interval
        self._callback = callback
        self._timer: Optional[asyncio.Task] = None
        self._ticks: Set[asyncio.Task] = set()
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def start(self) -> "PeriodicTask":
        if self._timer is None and not self._cancelled:
            self._timer = asyncio.get_running_loop().create_task(self._run())
        return self

    async def _run(self) -> None:
        while not self._cancelled:
            tick = asyncio.create_task(self._callback())
            self._ticks.add(tick)
            tick.add_done_callback(self._on_tick_done)
            await asyncio.sleep(self.interval)

    def _on_tick_done(self, tick: asyncio.Task) -> None:
        self._ticks.discard(tick)
        if not tick.cancelled() and tick.exception() is not None:
            logger.warning("Periodic tick failed: %r", tick.exception())

    def cancel(self) -> None:
        self._cancelled = True
        if self._timer is not None:
            self._timer.cancel()

    async def drain(self) -> None:
        """Wait for ticks that were already in flight."""
        if self._ticks:
            await asyncio.gather(*list(self._ticks), return_exceptions=True)
