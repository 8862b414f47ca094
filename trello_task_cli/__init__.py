"""trello-task-cli: move, add, delete, list, annotate and comment Trello cards by name."""

__version__ = "0.3.0"

from trello_task_cli.client import TrelloClient
from trello_task_cli.config import TrelloConfig, load_config
from trello_task_cli.errors import (
    AuthError,
    ConfigError,
    NotFoundError,
    RemoteError,
    TrelloCliError,
    UsageError,
)
from trello_task_cli.resolver import EntityResolver

__all__ = [
    "__version__",
    "AuthError",
    "ConfigError",
    "EntityResolver",
    "NotFoundError",
    "RemoteError",
    "TrelloCliError",
    "TrelloClient",
    "TrelloConfig",
    "UsageError",
    "load_config",
]
