from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol

import aiohttp

from ..util.cancel import wait_or_stop
from .errors import TransportError

LOGGER = logging.getLogger(__name__)


class Gate(Protocol):
    async def wait(self, stop: asyncio.Event | None = None) -> None: ...


@dataclass(slots=True)
class RawResponse:
    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""


class HttpTransport:
    """Sends requests through the shared rate gate and reads the whole body."""

    def __init__(
        self,
        *,
        gate: Gate | None = None,
        session: aiohttp.ClientSession | None = None,
        timeout_seconds: int = 30,
        logger: logging.Logger | None = None,
    ) -> None:
        self._gate = gate
        self._session = session
        self._owns_session = session is None
        self._timeout_seconds = timeout_seconds
        self._log = logger or LOGGER

    async def startup(self) -> None:
        if self._session is not None:
            return
        timeout = aiohttp.ClientTimeout(total=self._timeout_seconds)
        self._session = aiohttp.ClientSession(timeout=timeout)

    async def shutdown(self) -> None:
        if self._session is not None and self._owns_session:
            await self._session.close()
        self._session = None

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            await self.startup()
        if self._session is None:  # pragma: no cover
            raise RuntimeError("HTTP session is not initialized")
        return self._session

    async def send(
        self,
        method: str,
        url: str,
        *,
        operation: str,
        headers: Mapping[str, str],
        data: Any = None,
        stop: asyncio.Event | None = None,
    ) -> RawResponse:
        if self._gate is not None:
            await self._gate.wait(stop)
        session = await self._ensure_session()
        self._log.debug("Sending request", extra={"method": method, "url": url})
        try:
            return await wait_or_stop(
                self._exchange(session, method, url, headers, data), stop, what=operation
            )
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise TransportError(f"{operation}: {str(exc) or type(exc).__name__}") from exc

    @staticmethod
    async def _exchange(
        session: aiohttp.ClientSession,
        method: str,
        url: str,
        headers: Mapping[str, str],
        data: Any,
    ) -> RawResponse:
        async with session.request(method, url, headers=dict(headers), data=data) as response:
            body = await response.read()
            return RawResponse(status=response.status, headers=response.headers, body=body)
