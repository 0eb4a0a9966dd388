from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from dotenv import dotenv_values

from .util.timeparse import parse_duration

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


class ConfigError(Exception):
    pass


class MissingConfigError(ConfigError):
    def __init__(self, name: str) -> None:
        super().__init__(f"missing env: {name}")
        self.name = name


class InvalidConfigError(ConfigError):
    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"invalid env: {name} reason: {reason}")
        self.name = name
        self.reason = reason


@dataclass(slots=True)
class RedditConfig:
    client_id: str
    client_secret: str
    username: str
    password: str
    subreddits: list[str] = field(default_factory=lambda: ["golang"])
    rate_limit_seconds: float = 1.0
    top_n_authors: int = 10
    idle_backoff_seconds: float = 0.0
    http_timeout_seconds: int = 30


@dataclass(slots=True)
class LoggingConfig:
    level: int = logging.INFO


@dataclass(slots=True)
class AppConfig:
    reddit: RedditConfig
    logging: LoggingConfig


class _Env:
    """Process environment first, then values read from the .env file."""

    def __init__(self, file_values: Mapping[str, str | None]) -> None:
        self._file_values = file_values

    def get(self, name: str) -> str | None:
        value = os.getenv(name)
        if value is not None:
            return value
        return self._file_values.get(name)

    def required(self, name: str) -> str:
        value = self.get(name)
        if value is None:
            raise MissingConfigError(name)
        return value

    def optional(self, name: str, default: str) -> str:
        value = self.get(name)
        return default if value is None else value


def _get_int(env: _Env, name: str, default: str) -> int:
    value = env.optional(name, default)
    try:
        return int(value)
    except ValueError:
        raise InvalidConfigError(name, f"invalid integer {value!r}") from None


def _get_duration(env: _Env, name: str, default: str) -> float:
    try:
        return parse_duration(env.optional(name, default))
    except ValueError as exc:
        raise InvalidConfigError(name, str(exc)) from None


def _get_level(env: _Env, name: str, default: str) -> int:
    value = env.optional(name, default).strip().lower()
    if value not in LOG_LEVELS:
        raise InvalidConfigError(name, "must be: debug, info, warn, error")
    return LOG_LEVELS[value]


def _split_csv(raw: str) -> list[str]:
    return [seg.strip() for seg in raw.split(",") if seg.strip()]


def load_config(env_file: str | Path = ".env") -> AppConfig:
    path = Path(env_file)
    env = _Env(dotenv_values(path) if path.is_file() else {})

    reddit = RedditConfig(
        client_id=env.required("REDDIT_CLIENT_ID"),
        client_secret=env.required("REDDIT_CLIENT_SECRET"),
        username=env.required("REDDIT_USERNAME"),
        password=env.required("REDDIT_PASSWORD"),
        subreddits=_split_csv(env.optional("REDDIT_SUBREDDITS", "golang")),
        rate_limit_seconds=_get_duration(env, "REDDIT_RATE_LIMIT", "1s"),
        top_n_authors=_get_int(env, "REDDIT_TOP_N_AUTHORS", "10"),
        idle_backoff_seconds=_get_duration(env, "REDDIT_IDLE_BACKOFF", "0s"),
        http_timeout_seconds=_get_int(env, "HTTP_TIMEOUT_SECONDS", "30"),
    )
    if not reddit.subreddits:
        raise InvalidConfigError("REDDIT_SUBREDDITS", "at least one subreddit is required")
    return AppConfig(
        reddit=reddit,
        logging=LoggingConfig(level=_get_level(env, "REDDIT_LOG_LEVEL", "info")),
    )
