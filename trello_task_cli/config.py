"""
Runtime configuration: credentials and transport settings.

Values come from the process environment, after a ``.env`` file has been
merged in by python-dotenv. Already-set variables win over the file.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from trello_task_cli.errors import ConfigError

DEFAULT_BASE_URL = "https://api.trello.com/1"
DEFAULT_LOG_LEVEL = "WARNING"

API_KEY_VAR = "TRELLO_API_KEY"
TOKEN_VAR = "TRELLO_TOKEN"


@dataclass(frozen=True)
class TrelloConfig:
    api_key: str
    token: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float | None = None
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: str | None = None

    def __repr__(self) -> str:
        return (
            f"TrelloConfig(api_key='***', token='***', base_url={self.base_url!r}, "
            f"timeout={self.timeout!r}, log_level={self.log_level!r}, "
            f"log_file={self.log_file!r})"
        )


def load_config(
    environ: Mapping[str, str] | None = None,
    dotenv_path: str | Path | None = None,
) -> TrelloConfig:
    """Build a ``TrelloConfig`` or raise ``ConfigError``.

    When ``environ`` is given it is used as-is and no ``.env`` file is read.
    """
    if environ is None:
        load_dotenv(dotenv_path or find_dotenv(usecwd=True), override=False)
        environ = os.environ

    api_key = (environ.get(API_KEY_VAR) or "").strip()
    token = (environ.get(TOKEN_VAR) or "").strip()
    missing = [
        name for name, value in ((API_KEY_VAR, api_key), (TOKEN_VAR, token)) if not value
    ]
    if missing:
        raise ConfigError(
            f"Missing Trello API Key or Token ({', '.join(missing)}). "
            "Set them in the environment or a .env file."
        )

    return TrelloConfig(
        api_key=api_key,
        token=token,
        base_url=(environ.get("TRELLO_BASE_URL") or DEFAULT_BASE_URL).rstrip("/"),
        log_level=(environ.get("TRELLO_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
        log_file=environ.get("TRELLO_LOG_FILE") or None,
    )
