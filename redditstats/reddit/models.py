from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True, frozen=True)
class Entry:
    name: str
    title: str
    ups: int
    author: str

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Entry":
        return cls(
            name=str(data.get("name") or ""),
            title=str(data.get("title") or ""),
            ups=int(data.get("ups") or 0),
            author=str(data.get("author") or ""),
        )


@dataclass(slots=True)
class Listing:
    after: str = ""
    children: list[Entry] = field(default_factory=list)

    @property
    def is_last(self) -> bool:
        return not self.after

    @classmethod
    def from_json(cls, payload: Any) -> "Listing":
        if not isinstance(payload, dict):
            raise ValueError("listing payload must be an object")
        segment = payload.get("data") or {}
        if not isinstance(segment, dict):
            raise ValueError("listing data must be an object")
        children = []
        for child in segment.get("children") or []:
            data = child.get("data") if isinstance(child, dict) else None
            if not isinstance(data, dict):
                raise ValueError("listing child has no data object")
            children.append(Entry.from_json(data))
        return cls(after=segment.get("after") or "", children=children)


@dataclass(slots=True, frozen=True)
class AccessToken:
    access_token: str
    expires_in: int = 0
    scope: str = ""
    token_type: str = ""

    @classmethod
    def from_json(cls, payload: Any) -> "AccessToken":
        if not isinstance(payload, dict):
            raise ValueError("token payload must be an object")
        return cls(
            access_token=str(payload.get("access_token") or ""),
            expires_in=int(payload.get("expires_in") or 0),
            scope=str(payload.get("scope") or ""),
            token_type=str(payload.get("token_type") or payload.get("type") or ""),
        )
