"""Translate human-readable board, list and task names into Trello entities.

Every lookup refetches the parent's children and picks the first item whose
name matches case-insensitively, in the order Trello returned them.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from trello_task_cli.client import TrelloClient
from trello_task_cli.errors import NotFoundError
from trello_task_cli.log import get_logger
from trello_task_cli.models import Board, Card, TrelloList

logger = get_logger("resolver")

T = TypeVar("T")


def match_named_item(
    items: list[dict[str, Any]],
    query: str,
    *,
    name_key: str = "name",
) -> dict[str, Any] | None:
    lowered = (query or "").strip().casefold()
    if not lowered:
        return None
    for item in items:
        if str(item.get(name_key, "")).strip().casefold() == lowered:
            return item
    return None


class EntityResolver:
    def __init__(self, client: TrelloClient):
        self.client = client

    async def _resolve(
        self,
        kind: str,
        name: str,
        fetch: Callable[[], Awaitable[list[dict[str, Any]]]],
        build: Callable[[dict[str, Any]], T],
    ) -> T:
        items = await fetch()
        item = match_named_item(items, name)
        if item is None:
            logger.debug("No %s named %r among %d candidates", kind, name, len(items))
            raise NotFoundError(kind, name)
        logger.debug("Resolved %s %r -> %s", kind, name, item.get("id"))
        return build(item)

    async def resolve_board(self, name: str) -> Board:
        return await self._resolve("board", name, self.client.get_boards, Board.from_api)

    async def resolve_list(self, board_id: str, name: str) -> TrelloList:
        return await self._resolve(
            "list",
            name,
            lambda: self.client.get_lists(board_id=board_id),
            TrelloList.from_api,
        )

    async def resolve_task(self, list_id: str, name: str) -> Card:
        return await self._resolve(
            "task",
            name,
            lambda: self.client.get_list_cards(list_id=list_id),
            Card.from_api,
        )
