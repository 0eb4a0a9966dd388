from __future__ import annotations

import asyncio
from typing import Awaitable, TypeVar

T = TypeVar("T")


class OperationCancelledError(Exception):
    """Raised when the shared stop event fires while an operation is blocked."""

    def __init__(self, what: str = "shutdown requested") -> None:
        super().__init__(what)
        self.what = what


async def wait_or_stop(aw: Awaitable[T], stop: asyncio.Event | None, *, what: str) -> T:
    if stop is None:
        return await aw
    task = asyncio.ensure_future(aw)
    if stop.is_set():
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        raise OperationCancelledError(f"{what}: shutdown requested")
    stopper = asyncio.ensure_future(stop.wait())
    try:
        done, _ = await asyncio.wait({task, stopper}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        stopper.cancel()
        if not task.done():
            task.cancel()
    if task in done:
        return task.result()
    await asyncio.gather(task, return_exceptions=True)
    raise OperationCancelledError(f"{what}: shutdown requested")
