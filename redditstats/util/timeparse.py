from __future__ import annotations

import re

NUMBER = r"(?:\d+(?:\.\d*)?|\.\d+)"
BARE_NUMBER_PATTERN = re.compile(NUMBER)
DURATION_PATTERN = re.compile(rf"(?P<value>{NUMBER})(?P<unit>ns|us|µs|μs|ms|[smh])")
UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 0.001,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}


def parse_duration(text: str) -> float:
    """Parse durations such as ``1s``, ``.5s``, ``500ms`` or ``1m30s`` into seconds.

    Units follow Go's ``time.ParseDuration`` (ns, us/µs, ms, s, m, h). A value
    that is only a number, such as ``5``, is read as seconds; inside a compound
    duration every number needs a unit. Signs are not accepted and zero is
    allowed.
    """
    text = text.strip()
    if not text:
        raise ValueError("Empty duration")
    if BARE_NUMBER_PATTERN.fullmatch(text):
        return float(text)
    position = 0
    total = 0.0
    for match in DURATION_PATTERN.finditer(text):
        if match.start() != position:
            raise ValueError(f'invalid duration "{text}"')
        total += float(match.group("value")) * UNIT_SECONDS[match.group("unit")]
        position = match.end()
    if position != len(text):
        raise ValueError(f'invalid duration "{text}"')
    return total
