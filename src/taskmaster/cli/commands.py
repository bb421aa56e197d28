# src/taskmaster/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from ..core.state import AppState
from ..errors import PersistenceError, TaskError, ValidationError
from ..tasks.task_models import Priority
from ..tasks.task_view import render_task_list

# ask(prompt, initial_text) -> line typed by the user
AskFn = Callable[[str, str], str]
CommandHandler = Callable[[AppState, list[str], AskFn | None], str]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Outcome:
    """Result of one command: what to show the user and what happens next."""

    message: str
    ok: bool = True
    warning: str | None = None
    terminate: bool = False


@dataclass(slots=True)
class CommandSpec:
    name: str
    handler: CommandHandler
    help_text: str
    args_hint: str = ""
    aliases: list[str] = field(default_factory=list)
    mutating: bool = False
    terminates: bool = False

    @property
    def usage(self) -> str:
        names = " / ".join([self.name, *self.aliases])
        return f"{names} {self.args_hint}".rstrip()


class CommandRegistry:
    """
    Command table shared by the one-shot entry point and the interactive loop.

    handle() takes a raw input line, dispatch() takes an already tokenized
    command. Both validate and apply it to state.store, persist after mutating
    commands (when save mode is "each"), and turn TaskError into a failed
    Outcome instead of letting it escape.
    """

    def __init__(self) -> None:
        self._commands: dict[str, CommandSpec] = {}
        self._handlers: dict[str, CommandSpec] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        *,
        args_hint: str = "",
        aliases: list[str] | None = None,
        mutating: bool = False,
        terminates: bool = False,
    ) -> None:
        spec = CommandSpec(
            name=name.lower(),
            handler=handler,
            help_text=help_text,
            args_hint=args_hint,
            aliases=[a.lower() for a in aliases or []],
            mutating=mutating,
            terminates=terminates,
        )
        self._commands[spec.name] = spec
        self._handlers[spec.name] = spec
        for alias in spec.aliases:
            self._handlers[alias] = spec

    def resolve(self, name: str) -> CommandSpec | None:
        return self._handlers.get(name.lower())

    def handle(self, state: AppState, line: str, ask: AskFn | None = None) -> Outcome | None:
        """
        Handle a line like "change 2 buy oat milk".
        Returns None for a blank line.
        """
        parts = line.split()
        if not parts:
            return None
        return self.dispatch(state, parts[0], parts[1:], ask)

    def dispatch(
        self,
        state: AppState,
        name: str,
        args: list[str],
        ask: AskFn | None = None,
    ) -> Outcome:
        spec = self.resolve(name)
        if spec is None:
            return Outcome(f"Unknown command: '{name.lower()}'. Type 'h' for help.", ok=False)

        try:
            message = spec.handler(state, args, ask)
        except TaskError as e:
            logger.debug("Command %s failed: %s", spec.name, e)
            return Outcome(str(e), ok=False)
        except Exception:
            logger.exception("Command handler crashed: %s", spec.name)
            return Outcome("Internal error while handling a command.", ok=False)

        outcome = Outcome(message, terminate=spec.terminates)
        if spec.mutating and state.settings.save_each:
            outcome.warning = persist(state)
        return outcome

    def build_help(self) -> str:
        lines = ["Commands:"]
        for spec in self._commands.values():
            lines.append(f"  {spec.usage:<25} - {spec.help_text}")
        return "\n".join(lines)


def persist(state: AppState) -> str | None:
    """Save the store; on failure return a warning instead of raising."""
    try:
        state.store.save()
    except PersistenceError as e:
        return f"Warning: change kept in memory but not saved: {e}"
    return None


registry = CommandRegistry()


# ---- argument helpers ----


def _ask_for(ask: AskFn | None, prompt: str, usage: str, initial: str = "") -> str:
    if ask is None:
        raise ValidationError(f"Usage: {usage}")
    return ask(prompt, initial)


def _parse_index(raw: str) -> int:
    # plain ASCII base-10 only: int() would also take "+1", "1_0" and "١"
    text = raw.strip()
    digits = text[1:] if text.startswith("-") else text
    if not (digits.isascii() and digits.isdigit()):
        raise ValidationError(f"wrong argument: '{raw}' is not a valid task ID.")
    return int(text)


def _index_arg(args: list[str], ask: AskFn | None, usage: str) -> int:
    if len(args) > 1:
        raise ValidationError(f"Usage: {usage}")
    raw = args[0] if args else _ask_for(ask, "ID> ", usage)
    return _parse_index(raw)


def _usage(name: str) -> str:
    spec = registry.resolve(name)
    return spec.usage if spec is not None else name


# ---- handlers ----


def cmd_add(state: AppState, args: list[str], ask: AskFn | None = None) -> str:
    desc = " ".join(args)
    if not args:
        desc = _ask_for(ask, "Description> ", _usage("add"))
    index, task = state.store.add(desc)
    return f"Added task #{index}: {task.description}"


def cmd_list(state: AppState, args: list[str], ask: AskFn | None = None) -> str:
    return render_task_list(state.store.tasks)


def cmd_complete(state: AppState, args: list[str], ask: AskFn | None = None) -> str:
    index = _index_arg(args, ask, _usage("complete"))
    task = state.store.complete(index)
    return f"Completed task #{index}: {task.description}"


def cmd_delete(state: AppState, args: list[str], ask: AskFn | None = None) -> str:
    index = _index_arg(args, ask, _usage("delete"))
    task = state.store.delete(index)
    return f"Deleted task #{index}\n\t'{task.description}'"


def cmd_change(state: AppState, args: list[str], ask: AskFn | None = None) -> str:
    usage = _usage("change")
    raw = args[0] if args else _ask_for(ask, "ID> ", usage)
    index = _parse_index(raw)

    # Index is checked before asking for the new text.
    current = state.store.get(index)
    desc = " ".join(args[1:])
    if len(args) < 2:
        desc = _ask_for(ask, "Description> ", usage, initial=current.description)

    old_desc = state.store.change(index, desc)
    return (
        f"Description of task #{index} changed.\n"
        f'\tOld: "{old_desc}"\n'
        f'\tNew: "{state.store.get(index).description}"'
    )


def _priority_message(verb: str, index: int, before: Priority, after: Priority, desc: str) -> str:
    if before == after:
        return f"Task #{index} is already at {after.value} priority: {desc}"
    return f"{verb} task #{index} ({before.glyph} -> {after.glyph}): {desc}"


def cmd_up(state: AppState, args: list[str], ask: AskFn | None = None) -> str:
    index = _index_arg(args, ask, _usage("up"))
    before = state.store.get(index).priority
    task = state.store.raise_priority(index)
    return _priority_message("Prioritized", index, before, task.priority, task.description)


def cmd_down(state: AppState, args: list[str], ask: AskFn | None = None) -> str:
    index = _index_arg(args, ask, _usage("down"))
    before = state.store.get(index).priority
    task = state.store.lower_priority(index)
    return _priority_message("Deprioritized", index, before, task.priority, task.description)


def cmd_clear(state: AppState, args: list[str], ask: AskFn | None = None) -> str:
    removed = state.store.clear_completed()
    return f"Cleared {removed} completed tasks."


def cmd_help(state: AppState, args: list[str], ask: AskFn | None = None) -> str:
    return registry.build_help()


def cmd_quit(state: AppState, args: list[str], ask: AskFn | None = None) -> str:
    return "Exiting interactive mode."


registry.register("list", cmd_list, help_text="List all tasks", aliases=["l"])
registry.register(
    "add", cmd_add, help_text="Add a new task", args_hint="<desc>", aliases=["a"], mutating=True
)
registry.register(
    "complete",
    cmd_complete,
    help_text="Mark a task as completed",
    args_hint="<id>",
    aliases=["c"],
    mutating=True,
)
registry.register(
    "up", cmd_up, help_text="Increase a task's priority", args_hint="<id>", aliases=["+"], mutating=True
)
registry.register(
    "down",
    cmd_down,
    help_text="Decrease a task's priority",
    args_hint="<id>",
    aliases=["-"],
    mutating=True,
)
registry.register(
    "delete", cmd_delete, help_text="Delete a task", args_hint="<id>", aliases=["d"], mutating=True
)
registry.register(
    "change",
    cmd_change,
    help_text="Change a task's description",
    args_hint="<id> <desc>",
    aliases=["ch"],
    mutating=True,
)
registry.register(
    "clear", cmd_clear, help_text="Clear all completed tasks", aliases=["clr"], mutating=True
)
registry.register("help", cmd_help, help_text="Show this help message", aliases=["h", "?"])
registry.register(
    "quit", cmd_quit, help_text="Exit interactive mode", aliases=["q", "x", "exit"], terminates=True
)
