from __future__ import annotations

import asyncio
import logging
from urllib.parse import quote_plus, urlencode

import aiohttp
import orjson

from .errors import DecodeError, MissingInputError, NotInitializedError, UnexpectedStatusError
from .headers import standard_headers
from .models import AccessToken
from .transport import HttpTransport

LOGGER = logging.getLogger(__name__)
UNAUTHENTICATED_BASE_URL = "https://www.reddit.com"
TOKEN_PATH = "/api/v1/access_token"


class AuthSession:
    """Exchanges script-app credentials for a bearer token (password grant)."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        *,
        transport: HttpTransport,
        base_url: str = UNAUTHENTICATED_BASE_URL,
        logger: logging.Logger | None = None,
    ) -> None:
        self._client_id = client_id
        self._client_secret = client_secret
        self._transport = transport
        self._base_url = base_url.rstrip("/")
        self._log = logger or LOGGER

    @property
    def token_url(self) -> str:
        return f"{self._base_url}{TOKEN_PATH}"

    def _validate(self, username: str, password: str) -> None:
        if not self._client_id or not self._client_secret:
            raise NotInitializedError()
        if not username:
            raise MissingInputError("username")
        if not password:
            raise MissingInputError("password")

    def _headers(self) -> dict[str, str]:
        headers = standard_headers()
        headers["Content-Type"] = "application/x-www-form-urlencoded"
        auth = aiohttp.BasicAuth(quote_plus(self._client_id), quote_plus(self._client_secret))
        headers["Authorization"] = auth.encode()
        return headers

    async def login(self, username: str, password: str, *, stop: asyncio.Event | None = None) -> AccessToken:
        self._validate(username, password)
        body = urlencode({"username": username, "password": password, "grant_type": "password"})
        response = await self._transport.send(
            "POST",
            self.token_url,
            operation="fetch token",
            headers=self._headers(),
            data=body,
            stop=stop,
        )
        if response.status != 200:
            raise UnexpectedStatusError("POST", self.token_url, response.status)
        try:
            token = AccessToken.from_json(orjson.loads(response.body))
        except (orjson.JSONDecodeError, ValueError, TypeError) as exc:
            raise DecodeError(f"token response decoding: {exc}") from exc
        self._log.info("Obtained access token", extra={"scope": token.scope, "expires_in": token.expires_in})
        return token
