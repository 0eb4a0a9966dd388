from __future__ import annotations

from datetime import timedelta


class RedditError(Exception):
    """Base class for failures reported by the Reddit client."""


class MissingInputError(RedditError):
    def __init__(self, input_name: str) -> None:
        super().__init__(f"missing required input: {input_name}")
        self.input_name = input_name


class NotInitializedError(RedditError):
    def __init__(self) -> None:
        super().__init__("client uninitialized, use constructor")


class NotAuthenticatedError(RedditError):
    """A protected endpoint was requested before a bearer token was obtained."""

    def __init__(self) -> None:
        super().__init__("not authenticated")


class UnexpectedStatusError(RedditError):
    """The response status indicated neither success nor throttling."""

    def __init__(self, method: str, url: str, status: int) -> None:
        super().__init__(f"unexpected status code {status} ({method} {url})")
        self.method = method
        self.url = url
        self.status = status


class RateLimitExceededError(RedditError):
    """The request was denied with 429; ``resets_in`` tells when the quota resets."""

    def __init__(self, resets_in: timedelta) -> None:
        super().__init__(f"rate limit exceeded, resets in {int(resets_in.total_seconds())}s")
        self.resets_in = resets_in


class TransportError(RedditError):
    pass


class DecodeError(RedditError):
    pass


class RateStatusParseError(DecodeError):
    def __init__(self, header: str, value: str) -> None:
        super().__init__(f"parse {header}: invalid value {value!r}")
        self.header = header
        self.value = value
