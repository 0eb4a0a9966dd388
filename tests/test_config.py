from __future__ import annotations

import logging
from pathlib import Path

import pytest

from redditstats.config import InvalidConfigError, MissingConfigError, RedditConfig, load_config

ENV_NAMES = [
    "REDDIT_CLIENT_ID",
    "REDDIT_CLIENT_SECRET",
    "REDDIT_USERNAME",
    "REDDIT_PASSWORD",
    "REDDIT_SUBREDDITS",
    "REDDIT_RATE_LIMIT",
    "REDDIT_TOP_N_AUTHORS",
    "REDDIT_LOG_LEVEL",
    "REDDIT_IDLE_BACKOFF",
    "HTTP_TIMEOUT_SECONDS",
]

REQUIRED = """
REDDIT_CLIENT_ID=test-client-id
REDDIT_CLIENT_SECRET=test-client-secret
REDDIT_USERNAME=test-username
REDDIT_PASSWORD=test-password
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def write_env(tmp_path: Path, content: str) -> Path:
    path = tmp_path / ".env"
    path.write_text(content, encoding="utf-8")
    return path


def test_required_parameters_only(tmp_path: Path) -> None:
    config = load_config(write_env(tmp_path, REQUIRED))

    assert config.reddit == RedditConfig(
        client_id="test-client-id",
        client_secret="test-client-secret",
        username="test-username",
        password="test-password",
        subreddits=["golang"],
        rate_limit_seconds=1.0,
        top_n_authors=10,
        idle_backoff_seconds=0.0,
        http_timeout_seconds=30,
    )
    assert config.logging.level == logging.INFO


def test_all_parameters(tmp_path: Path) -> None:
    content = REQUIRED + (
        "REDDIT_SUBREDDITS=subreddit1,subreddit2\n"
        "REDDIT_RATE_LIMIT=60s\n"
        "REDDIT_LOG_LEVEL=debug\n"
        "REDDIT_TOP_N_AUTHORS=1337\n"
        "REDDIT_IDLE_BACKOFF=250ms\n"
    )

    config = load_config(write_env(tmp_path, content))

    assert config.reddit.subreddits == ["subreddit1", "subreddit2"]
    assert config.reddit.rate_limit_seconds == 60.0
    assert config.reddit.top_n_authors == 1337
    assert config.reddit.idle_backoff_seconds == pytest.approx(0.25)
    assert config.logging.level == logging.DEBUG


def test_process_environment_wins(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REDDIT_USERNAME", "from-env")

    config = load_config(write_env(tmp_path, REQUIRED))

    assert config.reddit.username == "from-env"


def test_missing_env_file_uses_process_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for line in REQUIRED.strip().splitlines():
        name, value = line.split("=", 1)
        monkeypatch.setenv(name, value)

    config = load_config(tmp_path / "absent.env")

    assert config.reddit.client_id == "test-client-id"


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("", "missing env: REDDIT_CLIENT_ID"),
        ("REDDIT_CLIENT_ID=test-client-id\n", "missing env: REDDIT_CLIENT_SECRET"),
        ("REDDIT_CLIENT_ID=a\nREDDIT_CLIENT_SECRET=b\n", "missing env: REDDIT_USERNAME"),
        ("REDDIT_CLIENT_ID=a\nREDDIT_CLIENT_SECRET=b\nREDDIT_USERNAME=c\n", "missing env: REDDIT_PASSWORD"),
    ],
)
def test_missing_required(tmp_path: Path, content: str, message: str) -> None:
    with pytest.raises(MissingConfigError) as excinfo:
        load_config(write_env(tmp_path, content))

    assert str(excinfo.value) == message


@pytest.mark.parametrize(
    ("extra", "message"),
    [
        ("REDDIT_RATE_LIMIT=invalid", 'invalid env: REDDIT_RATE_LIMIT reason: invalid duration "invalid"'),
        ("REDDIT_TOP_N_AUTHORS=NaN", "invalid env: REDDIT_TOP_N_AUTHORS reason: invalid integer 'NaN'"),
        ("REDDIT_LOG_LEVEL=NaL", "invalid env: REDDIT_LOG_LEVEL reason: must be: debug, info, warn, error"),
        ("REDDIT_SUBREDDITS= , ", "invalid env: REDDIT_SUBREDDITS reason: at least one subreddit is required"),
    ],
)
def test_invalid_values(tmp_path: Path, extra: str, message: str) -> None:
    with pytest.raises(InvalidConfigError) as excinfo:
        load_config(write_env(tmp_path, REQUIRED + extra + "\n"))

    assert str(excinfo.value) == message
