# src/taskmaster/cli/main.py

"""
CLI entrypoint.

Parses the one-shot command line, initializes logging, builds AppState, then
either runs a single command or hands over to the interactive console loop.

Exit codes: 0 on success (including user errors reported as messages),
1 when startup fails, 2 for usage errors.
"""

from __future__ import annotations

import argparse
import logging
import sys

from .. import __version__
from ..cli.bootstrap import create_initial_state
from ..config import Settings, get_settings
from ..connectors.console_connector import run_console_loop
from ..core.session import Session
from ..errors import LocationError, PersistenceError
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)

INTERACTIVE_COMMANDS = ("interactive", "i")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taskmaster",
        description="A simple commandline task manager tool",
        epilog=(
            "For more detailed help on a specific command, use:\n"
            "  taskmaster <COMMAND> --help"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    add_p = sub.add_parser("add", aliases=["a"], help="Add a new task")
    add_p.add_argument("description", nargs="+", help="The description of the task to be added")

    change_p = sub.add_parser("change", aliases=["ch"], help="Change description of a task")
    change_p.add_argument("index", help="The 1-based index of the task you want to change")
    change_p.add_argument("description", nargs="+", help="The new description for the task")

    sub.add_parser("list", aliases=["l"], help="List all tasks")

    complete_p = sub.add_parser("complete", aliases=["c"], help="Mark a task as completed")
    complete_p.add_argument("index", help="The 1-based index of the task to mark as complete")

    up_p = sub.add_parser("up", help="Rank up the task's priority")
    up_p.add_argument("index", help="The 1-based index of the task to rank up")

    down_p = sub.add_parser("down", help="Rank down the task's priority")
    down_p.add_argument("index", help="The 1-based index of the task to rank down")

    delete_p = sub.add_parser("delete", aliases=["d"], help="Delete a task")
    delete_p.add_argument("index", help="The 1-based index of the task to delete")

    sub.add_parser("clear", aliases=["clr"], help="Clear all completed tasks from the list")
    sub.add_parser("interactive", aliases=["i"], help="Change into interactive mode")

    return parser


def _command_args(ns: argparse.Namespace) -> list[str]:
    out: list[str] = []
    index = getattr(ns, "index", None)
    if index is not None:
        out.append(index)
    out.extend(getattr(ns, "description", None) or [])
    return out


def main(argv: list[str] | None = None, *, settings: Settings | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    if not ns.command:
        parser.print_help(sys.stderr)
        return 2

    if settings is None:
        settings = get_settings()

    console_level = getattr(logging, str(settings.log_level).upper(), logging.WARNING)
    setup_logging(log_dir=settings.log_dir, console_level=console_level)
    logger.debug("Starting %s (command=%s)", settings.app_name, ns.command)

    try:
        state = create_initial_state(settings=settings)
    except (LocationError, PersistenceError) as e:
        logger.debug("Startup failed.", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if ns.command in INTERACTIVE_COMMANDS:
        run_console_loop(state)
        return 0

    session = Session(state)
    outcome = session.execute(ns.command, _command_args(ns))
    warning = session.terminate()

    print(outcome.message, file=sys.stdout if outcome.ok else sys.stderr)
    for w in dict.fromkeys(x for x in (outcome.warning, warning) if x):
        print(w, file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
