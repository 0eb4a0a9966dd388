from __future__ import annotations

import asyncio
import logging
import sys
from typing import TextIO

from .config import AppConfig
from .orchestrator import Job
from .reddit.client import ListingClient
from .service.post import PostService
from .util.rate_gate import RateGate

LOGGER = logging.getLogger(__name__)


class Container:
    def __init__(self, config: AppConfig, *, writer: TextIO | None = None) -> None:
        self.config = config
        self.stop = asyncio.Event()
        self.errors: asyncio.Queue[BaseException] = asyncio.Queue()
        self.rate_gate = RateGate(config.reddit.rate_limit_seconds)
        self.client = ListingClient(
            config.reddit.client_id,
            config.reddit.client_secret,
            gate=self.rate_gate,
            timeout_seconds=config.reddit.http_timeout_seconds,
        )
        self.post_service = PostService(client=self.client, writer=writer or sys.stdout)

    async def login(self) -> None:
        await self.client.login(self.config.reddit.username, self.config.reddit.password, stop=self.stop)

    def build_jobs(self) -> list[Job]:
        jobs: list[Job] = []
        top_n = self.config.reddit.top_n_authors
        for subreddit in self.config.reddit.subreddits:

            async def top_posts(subreddit: str = subreddit) -> None:
                await self.post_service.update_top_posts(subreddit, stop=self.stop)

            async def top_authors(subreddit: str = subreddit) -> None:
                await self.post_service.update_top_n_authors(subreddit, top_n, stop=self.stop)

            jobs.append(top_posts)
            jobs.append(top_authors)
        LOGGER.debug("Built jobs", extra={"jobs": len(jobs), "subreddits": self.config.reddit.subreddits})
        return jobs

    async def shutdown(self) -> None:
        await self.client.shutdown()
