"""Periodic tick schedulers driving a game engine."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)

TickCallback = Callable[[], object]


class Scheduler(Protocol):
    """Starts and cancels a periodic callback."""

    @property
    def running(self) -> bool: ...

    def start(self, interval: float, callback: TickCallback) -> None: ...

    def cancel(self) -> None: ...


class ManualScheduler:
    """Scheduler that only ticks when :meth:`fire` is called.

    Lets tests and turn-based callers drive an engine deterministically.
    """

    def __init__(self) -> None:
        self.interval: float | None = None
        self.start_count = 0
        self._callback: TickCallback | None = None

    @property
    def running(self) -> bool:
        return self._callback is not None

    def start(self, interval: float, callback: TickCallback) -> None:
        self.interval = interval
        self.start_count += 1
        self._callback = callback

    def cancel(self) -> None:
        self._callback = None

    def fire(self, times: int = 1) -> int:
        """Invoke the callback up to *times* times. Returns the number run."""
        fired = 0
        for _ in range(times):
            # The callback may cancel the schedule mid-loop.
            callback = self._callback
            if callback is None:
                break
            callback()
            fired += 1
        return fired


class AsyncioScheduler:
    """Runs the callback every *interval* seconds on the running event loop.

    Each :meth:`start` bumps a generation counter; a loop that wakes up
    under a stale generation exits without calling back, so no tick runs
    after :meth:`cancel`. A callback that raises ends the loop; the engine
    stops its session before the error reaches here.
    """

    def __init__(self) -> None:
        self._task: asyncio.Task | None = None
        self._generation = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, interval: float, callback: TickCallback) -> None:
        self.cancel()
        generation = self._generation
        self._task = asyncio.get_running_loop().create_task(
            self._run(interval, callback, generation),
        )

    def cancel(self) -> None:
        self._generation += 1
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()

    async def _run(
        self, interval: float, callback: TickCallback, generation: int,
    ) -> None:
        try:
            while True:
                await asyncio.sleep(interval)
                if generation != self._generation:
                    return
                callback()
        except asyncio.CancelledError:
            logger.debug("Tick loop cancelled.")
        except Exception:
            logger.exception("Tick callback failed; stopping tick loop.")
            if generation == self._generation:
                self._task = None
