from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .errors import RateStatusParseError

REMAINING_HEADER = "X-Ratelimit-Remaining"
RESET_HEADER = "X-Ratelimit-Reset"
USED_HEADER = "X-Ratelimit-Used"


@dataclass(slots=True, frozen=True)
class RateStatus:
    remaining: float = 0.0
    reset: int = 0
    used: int = 0


def _single_value(headers: Mapping[str, str], name: str) -> str | None:
    # a repeated header is treated as absent
    getall = getattr(headers, "getall", None)
    if getall is None:
        return headers.get(name)
    values = getall(name, [])
    return values[0] if len(values) == 1 else None


def _parse(headers: Mapping[str, str], name: str, label: str, cast: type) -> float | int:
    raw = _single_value(headers, name)
    if raw is None:
        return cast(0)
    try:
        return cast(raw.strip())
    except ValueError:
        raise RateStatusParseError(label, raw) from None


def parse_rate_status(headers: Mapping[str, str]) -> RateStatus:
    return RateStatus(
        remaining=_parse(headers, REMAINING_HEADER, "ratelimit remaining", float),
        reset=_parse(headers, RESET_HEADER, "ratelimit reset", int),
        used=_parse(headers, USED_HEADER, "ratelimit used", int),
    )
