from __future__ import annotations

USER_AGENT = "redditstats/0.1.0 (by /u/redditstats)"


def standard_headers(*, bearer: str | None = None) -> dict[str, str]:
    headers = {
        "Content-Type": "application/json",
        "User-Agent": USER_AGENT,
    }
    if bearer is not None:
        headers["Authorization"] = f"Bearer {bearer}"
    return headers
