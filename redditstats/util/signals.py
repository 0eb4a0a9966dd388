from __future__ import annotations

import asyncio
import logging
import signal

LOGGER = logging.getLogger(__name__)


def setup_signal_handlers(stop: asyncio.Event) -> None:
    loop = asyncio.get_running_loop()

    def handler(sig: signal.Signals) -> None:
        LOGGER.info("Received signal, shutting down", extra={"signal": sig.name})
        stop.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, handler, sig)
        except NotImplementedError:  # pragma: no cover - Windows
            signal.signal(sig, lambda *_, s=sig: loop.call_soon_threadsafe(handler, s))
