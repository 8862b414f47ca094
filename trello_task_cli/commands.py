"""Action table and the flows behind each action.

Each flow resolves everything it needs first and then makes exactly one
read or mutating call, so a failed lookup never leaves a half-applied change.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from trello_task_cli.client import TrelloClient
from trello_task_cli.errors import UsageError
from trello_task_cli.log import get_logger
from trello_task_cli.resolver import EntityResolver

logger = get_logger("commands")

APPEND_MARKER = "📝 "


@dataclass(frozen=True)
class ActionSpec:
    name: str
    args: tuple[str, ...]
    summary: str
    handler: Callable[..., Awaitable[str]] = field(repr=False, compare=False)
    variadic: bool = False

    @property
    def usage(self) -> str:
        names = ["<board_name>", *(f"<{arg}>" for arg in self.args)]
        if self.variadic:
            names[-1] = f"{names[-1][:-1]}...>"
        return f"{self.name} {' '.join(names)}"


def validate(action: str, params: list[str]) -> tuple[ActionSpec, list[str]]:
    """Check arity and fold variadic trailing words into one argument.

    Returns the action spec and the normalised arguments, one per slot.
    """
    spec = ACTIONS.get(action)
    if spec is None:
        raise UsageError(f"Unknown action: {action}")

    arity = len(spec.args)
    if spec.variadic:
        if len(params) < arity:
            raise UsageError(f"Usage: {spec.usage}")
        text = " ".join(params[arity - 1 :])
        if not text.strip():
            raise UsageError(f"Usage: {spec.usage}")
        return spec, [*params[: arity - 1], text]

    if len(params) != arity:
        raise UsageError(f"Usage: {spec.usage}")
    return spec, list(params)


def append_description(existing: str, extra: str) -> str:
    current = (existing or "").strip()
    if not current:
        return f"{APPEND_MARKER}{extra}"
    return f"{current}\n\n{APPEND_MARKER}{extra}"


def render_tasks(list_name: str, cards: list[dict]) -> str:
    if not cards:
        return f'ℹ️ No tasks found in "{list_name}".'
    lines = [f'📋 Tasks in "{list_name}":']
    for card in cards:
        lines.append(f"- {card.get('name')}")
        desc = str(card.get("desc") or "").strip()
        if desc:
            lines.extend(f"    {line}" for line in desc.splitlines())
    return "\n".join(lines)


async def move_task(
    resolver: EntityResolver, board_name: str, from_list: str, task_name: str, to_list: str
) -> str:
    board = await resolver.resolve_board(board_name)
    source = await resolver.resolve_list(board.id, from_list)
    target = await resolver.resolve_list(board.id, to_list)
    task = await resolver.resolve_task(source.id, task_name)

    await resolver.client.move_card(card_id=task.id, list_id=target.id)
    logger.info("Moved card %s from list %s to %s", task.id, source.id, target.id)
    return f'✅ Task "{task_name}" moved to "{to_list}"'


async def add_task(
    resolver: EntityResolver, board_name: str, list_name: str, task_name: str
) -> str:
    board = await resolver.resolve_board(board_name)
    trello_list = await resolver.resolve_list(board.id, list_name)

    card = await resolver.client.create_card(list_id=trello_list.id, name=task_name)
    logger.info("Created card %s in list %s", card.get("id"), trello_list.id)
    return f'✅ Task "{task_name}" added to "{list_name}"'


async def delete_task(
    resolver: EntityResolver, board_name: str, list_name: str, task_name: str
) -> str:
    board = await resolver.resolve_board(board_name)
    trello_list = await resolver.resolve_list(board.id, list_name)
    task = await resolver.resolve_task(trello_list.id, task_name)

    await resolver.client.delete_card(card_id=task.id)
    logger.info("Deleted card %s", task.id)
    return f'✅ Task "{task_name}" deleted from "{list_name}"'


async def get_tasks(resolver: EntityResolver, board_name: str, list_name: str) -> str:
    board = await resolver.resolve_board(board_name)
    trello_list = await resolver.resolve_list(board.id, list_name)

    cards = await resolver.client.get_list_cards(list_id=trello_list.id)
    return render_tasks(list_name, cards)


async def append_info(
    resolver: EntityResolver, board_name: str, list_name: str, task_name: str, extra: str
) -> str:
    board = await resolver.resolve_board(board_name)
    trello_list = await resolver.resolve_list(board.id, list_name)
    task = await resolver.resolve_task(trello_list.id, task_name)

    await resolver.client.update_card_description(
        card_id=task.id, description=append_description(task.desc, extra)
    )
    logger.info("Appended to description of card %s", task.id)
    return f'✅ Appended info to "{task_name}"'


async def comment_task(
    resolver: EntityResolver, board_name: str, list_name: str, task_name: str, text: str
) -> str:
    board = await resolver.resolve_board(board_name)
    trello_list = await resolver.resolve_list(board.id, list_name)
    task = await resolver.resolve_task(trello_list.id, task_name)

    await resolver.client.add_comment(card_id=task.id, text=text)
    logger.info("Commented on card %s", task.id)
    return f'✅ Comment added to "{task_name}"'


ACTIONS: dict[str, ActionSpec] = {
    spec.name: spec
    for spec in (
        ActionSpec(
            "move",
            ("from_list_name", "task_name", "to_list_name"),
            "Move a task",
            move_task,
        ),
        ActionSpec("add", ("list_name", "task_name"), "Add a task", add_task),
        ActionSpec("delete", ("list_name", "task_name"), "Delete a task", delete_task),
        ActionSpec("get", ("list_name",), "Get all tasks from a list", get_tasks),
        ActionSpec(
            "append",
            ("list_name", "task_name", "extra_info"),
            "Append info to a task's description",
            append_info,
            variadic=True,
        ),
        ActionSpec(
            "comment",
            ("list_name", "task_name", "comment_text"),
            "Comment on a task",
            comment_task,
            variadic=True,
        ),
    )
}


async def run_action(
    client: TrelloClient, spec: ActionSpec, board_name: str, args: list[str]
) -> str:
    """Run an already validated action; ``args`` come from ``validate``."""
    logger.debug("Dispatching %s on board %r with %r", spec.name, board_name, args)
    return await spec.handler(EntityResolver(client), board_name, *args)


async def dispatch(
    client: TrelloClient, action: str, board_name: str, params: list[str]
) -> str:
    """Validate ``action`` and run it against ``board_name``; returns the text to print."""
    spec, args = validate(action, params)
    return await run_action(client, spec, board_name, args)
