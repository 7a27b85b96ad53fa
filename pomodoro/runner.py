"""Drive a timed phase to completion on a periodic tick."""

import asyncio
import inspect
import logging
import time
from typing import Awaitable, Callable, Optional, Union

from pomodoro.state import Completed, Phase, TimedPhase

logger = logging.getLogger(__name__)

Report = Callable[[TimedPhase, float], Union[None, Awaitable[None]]]


class Interval:
    """Periodic timing source using the monotonic clock.

    Boundaries fall at anchor + n * period (n >= 1), the anchor being the
    time of the first tick() call. Each tick() sleeps until the next
    boundary still ahead; a boundary already gone by is not delivered late.
    """

    def __init__(
        self,
        period: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if period <= 0:
            raise ValueError(f"Interval period must be positive: {period}")
        self.period = period
        self._clock = clock
        self._sleep = sleep
        self._next: Optional[float] = None

    async def tick(self) -> float:
        """Wait for the next boundary and return its deadline."""
        now = self._clock()
        if self._next is None:
            self._next = now + self.period
        elif self._next <= now:
            missed = int((now - self._next) // self.period) + 1
            self._next += missed * self.period
        await self._sleep(self._next - now)
        deadline = self._next
        self._next += self.period
        return deadline


async def run_timer(
    phase: TimedPhase,
    interval: Interval,
    report: Report,
    clock: Callable[[], float] = time.monotonic,
) -> Phase:
    """Tick `phase` until its period is over and return the successor marker.

    Ticks once straight away, then for every Continue: report the remaining
    time, wait for the next interval boundary, tick again. An exception from
    `report` ends the run and propagates; the phase is not resumable.
    """
    start_time = phase.start_time
    logger.debug("%s started, period %.3fs", phase.kind.value, phase.period_length)

    result = phase.tick(clock() - start_time)
    while not isinstance(result, Completed):
        current = result.phase
        remaining = current.remaining(clock() - start_time)
        outcome = report(current, remaining)
        if inspect.isawaitable(outcome):
            await outcome
        await interval.tick()
        result = current.tick(clock() - start_time)

    logger.debug("%s elapsed -> %s", phase.kind.value, result.phase.kind.value)
    return result.phase
