# src/taskmaster/connectors/console_connector.py

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from pathlib import Path

from ..cli.commands import registry as command_registry
from ..config import resolve_history_path
from ..core.session import Session
from ..core.state import AppState
from ..errors import InputCancelled

try:
    import readline
except ImportError:  # pragma: no cover - Windows without pyreadline
    readline = None  # type: ignore[assignment]

logger = logging.getLogger(__name__)

PROMPT = "» "
HISTORY_LENGTH = 1000

InputFn = Callable[[str], str]


def _load_history(path: Path | None) -> None:
    if readline is None or path is None or not path.exists():
        return
    try:
        readline.read_history_file(str(path))
    except OSError:
        logger.debug("Could not read history file %s", path, exc_info=True)
    readline.set_history_length(HISTORY_LENGTH)


def _save_history(path: Path | None) -> None:
    if readline is None or path is None:
        return
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        readline.write_history_file(str(path))
    except OSError as e:
        logger.error("Error saving history to %s: %s", path, e)


def _make_ask(input_fn: InputFn) -> Callable[[str, str], str]:
    def ask(prompt: str, initial: str = "") -> str:
        """Sub-prompt for a missing argument; `initial` pre-fills the line."""
        hook_set = False
        if initial and readline is not None and input_fn is input:
            readline.set_startup_hook(lambda: readline.insert_text(initial))
            hook_set = True
        try:
            return input_fn(prompt).strip()
        except (EOFError, KeyboardInterrupt):
            print()
            raise InputCancelled() from None
        finally:
            if hook_set:
                readline.set_startup_hook(None)

    return ask


def run_console_loop(state: AppState, *, input_fn: InputFn | None = None) -> None:
    """
    Blocking REPL: read one line, run one command, repeat.

    Ends on quit/exit, EOF (Ctrl-D) or Ctrl-C; every exit path goes through
    Session.terminate(), which performs the final save.
    """
    if input_fn is None:
        input_fn = input
    history_path = resolve_history_path(state.settings)
    _load_history(history_path)

    session = Session(state, registry=command_registry, ask=_make_ask(input_fn))
    logger.info("Console started (tasks=%d, file=%s).", len(state.store), state.store.path)

    print("Starting interactive mode. Type 'h' or 'help' for commands.")
    print(command_registry.build_help())
    print()

    try:
        while session.running:
            try:
                line = input_fn(PROMPT).strip()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                print("\nExiting interactive mode.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                print("\nExiting interactive mode.")
                break

            outcome = session.feed(line)
            if outcome is None:
                continue

            stream = sys.stdout if outcome.ok else sys.stderr
            print(outcome.message, file=stream)
            if outcome.warning:
                print(outcome.warning, file=sys.stderr)
    finally:
        # quit already terminated (and reported) inside feed()
        if session.running:
            warning = session.terminate()
            if warning:
                print(warning, file=sys.stderr)
        _save_history(history_path)

    logger.info("Console finished.")
