from __future__ import annotations

import asyncio
import logging
import time
from collections import Counter
from dataclasses import dataclass
from typing import Sequence, TextIO

from ..reddit.client import ListingFetcher
from ..reddit.errors import RedditError

LOGGER = logging.getLogger(__name__)
RULE_WIDTH = 80


class ReportError(Exception):
    pass


@dataclass(slots=True, frozen=True)
class TopPost:
    title: str
    ups: int

    def __str__(self) -> str:
        return f"({self.ups}) - {self.title} \n"


@dataclass(slots=True, frozen=True)
class AuthorPosts:
    author: str
    qty: int

    def __str__(self) -> str:
        return f"({self.qty}) - {self.author} \n"


class PostService:
    """Fetches subreddit listings and writes plain-text statistics reports."""

    def __init__(
        self,
        *,
        client: ListingFetcher,
        writer: TextIO,
        logger: logging.Logger | None = None,
    ) -> None:
        self._client = client
        self._writer = writer
        self._log = logger or LOGGER

    async def update_top_posts(self, subreddit: str, *, stop: asyncio.Event | None = None) -> None:
        start = time.monotonic()
        posts: list[TopPost] = []
        try:
            try:
                listing = await self._client.fetch_listing(f"/r/{subreddit}/top", stop=stop)
            except RedditError as exc:
                raise ReportError(f"fetch top posts: {subreddit}: fetch post listing: {exc}") from exc
            posts = [TopPost(title=entry.title, ups=entry.ups) for entry in listing.children]
            self._write(f"Top Posts ({subreddit})", posts, subreddit)
        finally:
            self._log.debug(
                "update top posts",
                extra={"subreddit": subreddit, "dur": round(time.monotonic() - start, 3), "posts": len(posts)},
            )

    async def update_top_n_authors(
        self, subreddit: str, num: int, *, stop: asyncio.Event | None = None
    ) -> None:
        start = time.monotonic()
        try:
            try:
                listings = await self._client.fetch_all_listings(f"/r/{subreddit}", stop=stop)
            except RedditError as exc:
                raise ReportError(f"fetch top authors: {subreddit}: fetch all listings: {exc}") from exc
            counts: Counter[str] = Counter()
            for listing in listings:
                for entry in listing.children:
                    counts[entry.author] += 1
            # ties keep first-seen order
            ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
            top = [AuthorPosts(author=author, qty=qty) for author, qty in ranked[: max(num, 0)]]
            self._write(f"Top {num} Authors ({subreddit})", top, subreddit)
        finally:
            self._log.debug(
                "update top n authors",
                extra={"subreddit": subreddit, "dur": round(time.monotonic() - start, 3)},
            )

    def _write(self, title: str, lines: Sequence[object], subreddit: str) -> None:
        parts = ["\n", f"{title}\n", "-" * RULE_WIDTH + "\n"]
        parts.extend(str(line) for line in lines)
        parts.append("\n")
        try:
            self._writer.write("".join(parts))
            self._writer.flush()
        except OSError as exc:
            raise ReportError(f"write: {subreddit}: {exc}") from exc
