from __future__ import annotations

import asyncio
import logging
from datetime import timedelta
from typing import Protocol
from urllib.parse import urlencode

import orjson

from .auth import AuthSession, UNAUTHENTICATED_BASE_URL
from .errors import DecodeError, NotAuthenticatedError, RateLimitExceededError, UnexpectedStatusError
from .headers import standard_headers
from .models import AccessToken, Listing
from .paging import Page
from .rate_status import parse_rate_status
from .transport import Gate, HttpTransport

LOGGER = logging.getLogger(__name__)
AUTHENTICATED_BASE_URL = "https://oauth.reddit.com"
PAGE_LIMIT = 1000


class ListingFetcher(Protocol):
    async def fetch_listing(self, path: str, *, stop: asyncio.Event | None = None) -> Listing: ...

    async def fetch_all_listings(self, path: str, *, stop: asyncio.Event | None = None) -> list[Listing]: ...


class ListingClient(ListingFetcher):
    """Client for Reddit's OAuth listing endpoints.

    ``login`` must complete before any fetch. The token is written once and
    only read afterwards, so fetches may run concurrently from many tasks.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        *,
        gate: Gate | None = None,
        transport: HttpTransport | None = None,
        auth_base_url: str = UNAUTHENTICATED_BASE_URL,
        api_base_url: str = AUTHENTICATED_BASE_URL,
        timeout_seconds: int = 30,
        logger: logging.Logger | None = None,
    ) -> None:
        self._log = logger or LOGGER
        self._transport = transport or HttpTransport(gate=gate, timeout_seconds=timeout_seconds, logger=self._log)
        self._auth = AuthSession(
            client_id,
            client_secret,
            transport=self._transport,
            base_url=auth_base_url,
            logger=self._log,
        )
        self._api_base_url = api_base_url.rstrip("/")
        self._token: AccessToken | None = None

    @property
    def token(self) -> AccessToken | None:
        return self._token

    async def startup(self) -> None:
        await self._transport.startup()

    async def shutdown(self) -> None:
        await self._transport.shutdown()

    async def login(self, username: str, password: str, *, stop: asyncio.Event | None = None) -> None:
        self._token = await self._auth.login(username, password, stop=stop)

    async def fetch_listing(self, path: str, *, stop: asyncio.Event | None = None) -> Listing:
        return await self._fetch_listing(path, None, stop)

    async def fetch_all_listings(self, path: str, *, stop: asyncio.Event | None = None) -> list[Listing]:
        """Follow the ``after`` cursor until the last page.

        Every page waits on the rate gate, so large listings take a while.
        Any failing page aborts the whole walk.
        """
        page = Page(limit=PAGE_LIMIT)
        out: list[Listing] = []
        while True:
            listing = await self._fetch_listing(path, page, stop)
            page.after = listing.after
            page.count += len(listing.children)
            out.append(listing)
            self._log.debug("fetched page of listings", extra={"path": path, "page": len(out)})
            if listing.is_last:
                break
        return out

    def _build_url(self, path: str, page: Page | None) -> str:
        url = f"{self._api_base_url}{path}"
        params = page.values() if page is not None else {}
        if params:
            url = f"{url}?{urlencode(params)}"
        return url

    async def _fetch_listing(self, path: str, page: Page | None, stop: asyncio.Event | None) -> Listing:
        if self._token is None or not self._token.access_token:
            raise NotAuthenticatedError()
        response = await self._transport.send(
            "GET",
            self._build_url(path, page),
            operation="send request",
            headers=standard_headers(bearer=self._token.access_token),
            stop=stop,
        )
        rate = parse_rate_status(response.headers)
        self._log.debug(
            "rate status",
            extra={"used": rate.used, "remaining": rate.remaining, "reset": rate.reset},
        )
        if response.status == 200:
            try:
                return Listing.from_json(orjson.loads(response.body))
            except (orjson.JSONDecodeError, ValueError, TypeError, AttributeError) as exc:
                raise DecodeError(f"listing decoding: {path}: {exc}") from exc
        if response.status == 429:
            raise RateLimitExceededError(timedelta(seconds=rate.reset))
        raise UnexpectedStatusError("GET", path, response.status)
