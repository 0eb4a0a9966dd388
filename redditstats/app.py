from __future__ import annotations

import asyncio
import logging
import sys

from . import orchestrator
from .config import ConfigError, load_config
from .di import Container
from .logging_config import configure_logging
from .orchestrator import is_cancellation
from .util.cancel import OperationCancelledError, wait_or_stop
from .util.signals import setup_signal_handlers

LOGGER = logging.getLogger(__name__)


async def run_app(container: Container) -> int:
    setup_signal_handlers(container.stop)
    tasks: list[asyncio.Task] = []
    try:
        try:
            await container.login()
        except Exception as exc:
            if is_cancellation(exc):
                LOGGER.info("Shutdown signal received during login, exiting...")
                return 0
            LOGGER.exception("Login failed")
            return 1

        tasks = orchestrator.run(
            container.stop,
            container.errors,
            *container.build_jobs(),
            idle_backoff=container.config.reddit.idle_backoff_seconds,
        )
        try:
            err = await wait_or_stop(container.errors.get(), container.stop, what="wait for jobs")
        except OperationCancelledError as exc:
            err = exc
        if is_cancellation(err):
            LOGGER.info("Shutdown signal received, exiting...")
            return 0
        LOGGER.error("Job reported an error", extra={"error": str(err)})
        return 1
    finally:
        container.stop.set()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        await container.shutdown()


async def main() -> int:
    try:
        config = load_config()
    except ConfigError as exc:
        configure_logging()
        LOGGER.error("Invalid configuration", extra={"error": str(exc)})
        return 1
    configure_logging(config.logging.level)
    return await run_app(Container(config))


def cli() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
