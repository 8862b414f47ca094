from __future__ import annotations

import asyncio
from typing import Any

import aiohttp

from trello_task_cli.config import TrelloConfig
from trello_task_cli.errors import AuthError, RemoteError
from trello_task_cli.log import get_logger, sanitize_for_log

logger = get_logger("client")


class TrelloClient:
    def __init__(self, config: TrelloConfig):
        self.config = config
        self.base_url = config.base_url.rstrip("/")
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> TrelloClient:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            if self.config.timeout is None:
                self._session = aiohttp.ClientSession(trust_env=True)
            else:
                timeout = aiohttp.ClientTimeout(total=self.config.timeout)
                self._session = aiohttp.ClientSession(timeout=timeout, trust_env=True)
        return self._session

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()

    @staticmethod
    def _ensure_dict(data: Any, endpoint: str) -> dict[str, Any]:
        if not isinstance(data, dict):
            raise RemoteError(
                f"Unexpected response type for {endpoint}: {type(data).__name__}"
            )
        return data

    @staticmethod
    def _ensure_list_of_dict(data: Any, endpoint: str) -> list[dict[str, Any]]:
        if not isinstance(data, list):
            raise RemoteError(
                f"Unexpected response type for {endpoint}: {type(data).__name__}"
            )
        if not all(isinstance(item, dict) for item in data):
            raise RemoteError(
                f"Unexpected item type in response for {endpoint}: list contains non-object entries."
            )
        return data

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
    ) -> Any:
        query = params.copy() if params else {}
        query["key"] = self.config.api_key
        query["token"] = self.config.token
        url = f"{self.base_url}/{path.lstrip('/')}"

        session = await self._get_session()
        try:
            async with session.request(method=method, url=url, params=query) as resp:
                logger.debug("%s %s -> %s", method, sanitize_for_log(path), resp.status)
                if resp.status in (401, 403):
                    raise AuthError(
                        "Authentication failed. Check TRELLO_API_KEY and TRELLO_TOKEN.",
                        status=resp.status,
                    )
                if resp.status >= 400:
                    body = await resp.text()
                    raise RemoteError(
                        f"HTTP {resp.status}: {body[:300]}", status=resp.status
                    )
                if resp.content_length == 0:
                    return {}
                try:
                    return await resp.json()
                except aiohttp.ContentTypeError:
                    return {"text": await resp.text()}
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logger.debug("%s %s failed: %s", method, path, sanitize_for_log(repr(exc)))
            raise RemoteError(f"Network error: {exc}") from exc

    async def get_boards(self) -> list[dict[str, Any]]:
        data = await self._request(
            "GET",
            "/members/me/boards",
            params={"fields": "id,name"},
        )
        return self._ensure_list_of_dict(data, "/members/me/boards")

    async def get_lists(self, *, board_id: str) -> list[dict[str, Any]]:
        data = await self._request(
            "GET",
            f"/boards/{board_id}/lists",
            params={"fields": "id,name,idBoard"},
        )
        return self._ensure_list_of_dict(data, f"/boards/{board_id}/lists")

    async def get_list_cards(self, *, list_id: str) -> list[dict[str, Any]]:
        data = await self._request(
            "GET",
            f"/lists/{list_id}/cards",
            params={"fields": "id,name,desc,idList"},
        )
        return self._ensure_list_of_dict(data, f"/lists/{list_id}/cards")

    async def create_card(self, *, list_id: str, name: str) -> dict[str, Any]:
        data = await self._request(
            "POST",
            "/cards",
            params={"idList": list_id, "name": name},
        )
        return self._ensure_dict(data, "/cards")

    async def move_card(self, *, card_id: str, list_id: str) -> dict[str, Any]:
        data = await self._request(
            "PUT",
            f"/cards/{card_id}",
            params={"idList": list_id},
        )
        return self._ensure_dict(data, f"/cards/{card_id}")

    async def update_card_description(
        self, *, card_id: str, description: str
    ) -> dict[str, Any]:
        data = await self._request(
            "PUT",
            f"/cards/{card_id}",
            params={"desc": description},
        )
        return self._ensure_dict(data, f"/cards/{card_id}")

    async def delete_card(self, *, card_id: str) -> dict[str, Any]:
        return await self._request("DELETE", f"/cards/{card_id}")

    async def add_comment(self, *, card_id: str, text: str) -> dict[str, Any]:
        data = await self._request(
            "POST",
            f"/cards/{card_id}/actions/comments",
            params={"text": text},
        )
        return self._ensure_dict(data, f"/cards/{card_id}/actions/comments")
