"""Boards, lists and cards as returned by the Trello API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Board:
    id: str
    name: str
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Board:
        return cls(id=str(data.get("id") or ""), name=str(data.get("name") or ""), raw=data)


@dataclass(frozen=True)
class TrelloList:
    id: str
    name: str
    board_id: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> TrelloList:
        return cls(
            id=str(data.get("id") or ""),
            name=str(data.get("name") or ""),
            board_id=data.get("idBoard"),
            raw=data,
        )


@dataclass(frozen=True)
class Card:
    id: str
    name: str
    desc: str = ""
    list_id: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Card:
        return cls(
            id=str(data.get("id") or ""),
            name=str(data.get("name") or ""),
            desc=str(data.get("desc") or ""),
            list_id=data.get("idList"),
            raw=data,
        )
