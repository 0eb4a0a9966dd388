from __future__ import annotations

import asyncio
import enum
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable

from .util.cancel import OperationCancelledError

LOGGER = logging.getLogger(__name__)

Job = Callable[[], Awaitable[None]]


class Outcome(enum.Enum):
    OK = "ok"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass(slots=True, frozen=True)
class JobResult:
    outcome: Outcome
    error: BaseException | None = None


def is_cancellation(exc: BaseException) -> bool:
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        if isinstance(current, OperationCancelledError):
            return True
        seen.add(id(current))
        current = current.__cause__
    return False


async def _run_once(job: Job, stop: asyncio.Event) -> JobResult:
    if stop.is_set():
        return JobResult(Outcome.CANCELLED, OperationCancelledError())
    try:
        await job()
    except Exception as exc:
        if is_cancellation(exc):
            return JobResult(Outcome.CANCELLED, exc)
        return JobResult(Outcome.FAILED, exc)
    return JobResult(Outcome.OK)


async def _pause(stop: asyncio.Event, idle_backoff: float) -> None:
    if idle_backoff <= 0:
        await asyncio.sleep(0)
        return
    try:
        await asyncio.wait_for(stop.wait(), timeout=idle_backoff)
    except asyncio.TimeoutError:
        pass


async def _worker(
    index: int,
    job: Job,
    stop: asyncio.Event,
    errors: asyncio.Queue[BaseException],
    idle_backoff: float,
    log: logging.Logger,
) -> JobResult:
    iterations = 0
    while True:
        result = await _run_once(job, stop)
        iterations += 1
        if result.outcome is Outcome.FAILED:
            log.error("Job failed", exc_info=result.error, extra={"job": index, "iterations": iterations})
            errors.put_nowait(result.error)
            return result
        if result.outcome is Outcome.CANCELLED:
            log.debug("Job cancelled", extra={"job": index, "iterations": iterations})
            errors.put_nowait(result.error)
            return result
        await _pause(stop, idle_backoff)


def run(
    stop: asyncio.Event,
    errors: asyncio.Queue[BaseException],
    *jobs: Job,
    idle_backoff: float = 0.0,
    logger: logging.Logger | None = None,
) -> list[asyncio.Task[JobResult]]:
    """Run every job over and over on its own task until it fails or ``stop`` fires.

    Returns right after spawning. Each worker reports exactly one terminal
    error to ``errors`` and then exits; callers normally read the first one
    and shut down.
    """
    log = logger or LOGGER
    tasks = [
        asyncio.create_task(_worker(i, job, stop, errors, idle_backoff, log), name=f"job-{i}")
        for i, job in enumerate(jobs)
    ]
    log.info("Started jobs", extra={"jobs": len(tasks), "idle_backoff": idle_backoff})
    return tasks
