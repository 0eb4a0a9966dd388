from __future__ import annotations

import asyncio
import logging
import time

from .cancel import OperationCancelledError, wait_or_stop

LOGGER = logging.getLogger(__name__)


class RateGate:
    """Admits one call per ``interval`` seconds.

    Waiters queue on a lock, so admissions are spaced even when many tasks
    share the gate.
    """

    def __init__(self, interval: float, *, logger: logging.Logger | None = None) -> None:
        if interval < 0:
            raise ValueError("Interval must not be negative")
        self._interval = interval
        self._lock = asyncio.Lock()
        self._last = 0.0
        self._log = logger or LOGGER

    @property
    def interval(self) -> float:
        return self._interval

    async def wait(self, stop: asyncio.Event | None = None) -> None:
        if stop is not None and stop.is_set():
            raise OperationCancelledError("rate limiter: shutdown requested")
        await wait_or_stop(self._lock.acquire(), stop, what="rate limiter")
        try:
            if self._interval <= 0:
                return
            now = time.monotonic()
            sleep_for = self._last + self._interval - now
            if sleep_for > 0:
                self._log.debug("Rate gate delaying request", extra={"sleep_for": round(sleep_for, 3)})
                await wait_or_stop(asyncio.sleep(sleep_for), stop, what="rate limiter")
            self._last = time.monotonic()
        finally:
            self._lock.release()
