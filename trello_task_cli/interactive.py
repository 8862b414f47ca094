"""
Prompt-driven mode used when the CLI is started without arguments.
Gathers the same arguments as the positional form and hands them to dispatch().

Prompts block on ``input()``, so they run outside the event loop and only the
network steps go through the runner; Ctrl-C at a prompt raises
KeyboardInterrupt straight away.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable

from trello_task_cli.client import TrelloClient
from trello_task_cli.commands import ACTIONS, dispatch
from trello_task_cli.errors import UsageError
from trello_task_cli.resolver import EntityResolver


def _choose(
    title: str,
    options: list[str],
    prompt: Callable[[str], str],
    out: Callable[[str], None],
) -> int:
    """Show a numbered menu and return the chosen index."""
    if not options:
        raise UsageError(f"Nothing to choose from for: {title}")
    out(f"{title}:")
    for idx, option in enumerate(options, start=1):
        out(f"  {idx}. {option}")
    choice = prompt(f"Choose [1-{len(options)}]: ").strip()
    try:
        index = int(choice)
    except ValueError:
        raise UsageError(f"Invalid choice: {choice!r}") from None
    if not 1 <= index <= len(options):
        raise UsageError(f"Invalid choice: {choice!r}")
    return index - 1


def _ask(label: str, prompt: Callable[[str], str]) -> str:
    value = prompt(f"{label}: ").strip()
    if not value:
        raise UsageError(f"{label} is required.")
    return value


def run_interactive(
    client: TrelloClient,
    prompt: Callable[[str], str] | None = None,
    out: Callable[[str], None] | None = None,
) -> str:
    """Prompt for an action and its arguments, run it and return the text to print.

    The client is closed before returning, whatever the outcome.
    """
    prompt = prompt or input
    out = out or print
    with asyncio.Runner() as runner:
        try:
            board_name = _ask("Enter board name", prompt)
            board = runner.run(EntityResolver(client).resolve_board(board_name))
            lists = runner.run(client.get_lists(board_id=board.id))
            list_names = [str(item.get("name")) for item in lists]

            specs = list(ACTIONS.values())
            spec = specs[_choose("Choose an action", [s.summary for s in specs], prompt, out)]

            params = []
            for arg in spec.args:
                label = arg.replace("_", " ").capitalize()
                if arg.endswith("list_name"):
                    params.append(
                        list_names[_choose(f"Select {label.lower()}", list_names, prompt, out)]
                    )
                else:
                    params.append(_ask(label, prompt))

            return runner.run(dispatch(client, spec.name, board.name, params))
        finally:
            runner.run(client.close())
