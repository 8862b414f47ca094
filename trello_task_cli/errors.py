"""
Exception hierarchy for trello-task-cli.

Every error is terminal for the invocation; ``cli.main`` prints the message
and exits with ``exit_code``.
"""

from __future__ import annotations


class TrelloCliError(Exception):
    exit_code = 1


class ConfigError(TrelloCliError):
    """Missing or unusable credentials."""


class UsageError(TrelloCliError):
    """Unknown action, wrong argument count or bad flags."""


class NotFoundError(TrelloCliError):
    """A board, list or task name has no case-insensitive match."""

    def __init__(self, kind: str, name: str):
        self.kind = kind
        self.name = name
        super().__init__(f'{kind.capitalize()} "{name}" not found.')


class RemoteError(TrelloCliError):
    """Non-2xx response or transport failure talking to Trello."""

    def __init__(self, message: str, status: int | None = None):
        self.status = status
        self.message = message
        super().__init__(message)


class AuthError(RemoteError):
    pass
