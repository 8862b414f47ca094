"""
Command-line entry point for trello-task-cli.

Usage: trello-task <action> <board_name> [args...]
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from trello_task_cli import __version__
from trello_task_cli.client import TrelloClient
from trello_task_cli.commands import ACTIONS, ActionSpec, run_action, validate
from trello_task_cli.config import TrelloConfig, load_config
from trello_task_cli.errors import TrelloCliError, UsageError
from trello_task_cli.interactive import run_interactive
from trello_task_cli.log import get_logger, setup_logging

logger = get_logger("cli")

PROG = "trello-task"


def _help_text() -> str:
    width = max(len(spec.usage) for spec in ACTIONS.values()) + 2
    commands = "\n".join(
        f"  {spec.usage.ljust(width)}{spec.summary}" for spec in ACTIONS.values()
    )
    return f"""\
Usage:
  {PROG} [options] <action> <board_name> [args...]
  {PROG}                          Interactive mode

Available Commands:
{commands}

Options:
  -h, --help       Show this help
  -v, --verbose    Log requests to stderr
  --version        Show version

Names are matched case-insensitively. Trailing words of append and comment
are joined with spaces, so the free text does not need quoting. Options go
before the action; words after the board name are passed through as-is,
except -h and --help, which show this help wherever they appear.

Environment:
  TRELLO_API_KEY, TRELLO_TOKEN (required, may live in a .env file)

Examples:
  {PROG} move "Roadmap" "In Progress" "Fix bug #42" "Done"
  {PROG} add "Roadmap" "To Do" "Review PR"
  {PROG} delete "Roadmap" "In Progress" "Fix bug #42"
  {PROG} get "Roadmap" "In Progress"
  {PROG} append "Roadmap" "In Progress" "Fix bug #42" repro steps in README
  {PROG} comment "Roadmap" "In Progress" "Fix bug #42" needs more testing
"""


class _CliParser(argparse.ArgumentParser):
    """Parser that raises UsageError instead of exiting with status 2."""

    def error(self, message):
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _CliParser(prog=PROG, add_help=False)
    parser.add_argument("--version", action="store_true")
    parser.add_argument("--verbose", "-v", action="store_true")
    parser.add_argument("action", nargs="?")
    parser.add_argument("board", nargs="?")
    # Everything after the board is literal, dash words included.
    parser.add_argument("params", nargs=argparse.REMAINDER)
    return parser


async def _run(config: TrelloConfig, spec: ActionSpec, board: str, args: list[str]) -> str:
    async with TrelloClient(config) as client:
        return await run_action(client, spec, board, args)


def _emit_error(err: TrelloCliError) -> None:
    print(f"❌ {err}", file=sys.stderr)
    if isinstance(err, UsageError):
        print(f"Run {PROG} --help for usage instructions.", file=sys.stderr)


def main(argv: list[str] | None = None) -> None:
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")

    argv = sys.argv[1:] if argv is None else list(argv)

    if "--help" in argv or "-h" in argv:
        print(_help_text())
        sys.exit(0)

    try:
        ns = build_parser().parse_args(argv)

        if ns.version:
            print(f"{PROG} {__version__}")
            sys.exit(0)

        config = load_config()
        setup_logging("DEBUG" if ns.verbose else config.log_level, config.log_file)

        if ns.action is None:
            output = run_interactive(TrelloClient(config))
        else:
            if ns.board is None:
                raise UsageError("Missing board name.")
            spec, args = validate(ns.action, ns.params)
            output = asyncio.run(_run(config, spec, ns.board, args))
    except TrelloCliError as e:
        logger.debug("Command failed", exc_info=True)
        _emit_error(e)
        sys.exit(e.exit_code)
    except (KeyboardInterrupt, EOFError):
        print("\nAborted.", file=sys.stderr)
        sys.exit(1)

    print(output)
    sys.exit(0)


if __name__ == "__main__":
    main()
