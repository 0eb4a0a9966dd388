from __future__ import annotations

import logging

import orjson

from redditstats.logging_config import JsonFormatter


def make_record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord("redditstats.test", logging.INFO, __file__, 1, "fetched %s", ("page",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_emits_json_with_extra_fields() -> None:
    payload = orjson.loads(JsonFormatter().format(make_record(subreddit="golang", page=2)))

    assert payload["message"] == "fetched page"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "redditstats.test"
    assert payload["subreddit"] == "golang"
    assert payload["page"] == 2
    assert "args" not in payload
    assert "lineno" not in payload


def test_formatter_falls_back_to_repr() -> None:
    payload = orjson.loads(JsonFormatter().format(make_record(obj=object())))

    assert payload["obj"].startswith("<object object")
