from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Page:
    after: str = ""
    before: str = ""
    count: int = 0
    limit: int = 0

    def values(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.after:
            params["after"] = self.after
        if self.before:
            params["before"] = self.before
        if self.count > 0:
            params["count"] = str(self.count)
        if self.limit > 0:
            params["limit"] = str(self.limit)
        return params
