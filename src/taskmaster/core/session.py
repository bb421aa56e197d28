# src/taskmaster/core/session.py

from __future__ import annotations

import logging
from enum import StrEnum

from ..cli.commands import AskFn, CommandRegistry, Outcome, persist, registry as default_registry
from .state import AppState

logger = logging.getLogger(__name__)


class SessionState(StrEnum):
    RUNNING = "running"
    TERMINATED = "terminated"


class Session:
    """
    One interactive (or one-shot) session over an AppState.

    RUNNING -> RUNNING for every command except quit, which moves to
    TERMINATED. EOF / Ctrl-C end the session through terminate(). The final
    save happens exactly once, on the transition to TERMINATED.
    """

    def __init__(
        self,
        state: AppState,
        *,
        registry: CommandRegistry | None = None,
        ask: AskFn | None = None,
    ) -> None:
        self._app = state
        self._registry = registry or default_registry
        self._ask = ask
        self._state = SessionState.RUNNING
        self._final_warning: str | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def running(self) -> bool:
        return self._state is SessionState.RUNNING

    def feed(self, line: str) -> Outcome | None:
        """Process one input line. Blank lines return None."""
        self._require_running()
        outcome = self._registry.handle(self._app, line, self._ask)
        if outcome is None:
            return None
        return self._after(outcome)

    def execute(self, name: str, args: list[str]) -> Outcome:
        self._require_running()
        outcome = self._registry.dispatch(self._app, name, args, self._ask)
        return self._after(outcome)

    def terminate(self) -> str | None:
        """
        Move to TERMINATED and flush unsaved changes.
        Returns a warning if the final save failed. Safe to call twice.
        """
        if self._state is SessionState.TERMINATED:
            return self._final_warning
        self._state = SessionState.TERMINATED
        if self._app.store.dirty:
            self._final_warning = persist(self._app)
            if self._final_warning:
                logger.warning("Final save failed: %s", self._final_warning)
        logger.info("Session terminated.")
        return self._final_warning

    def _after(self, outcome: Outcome) -> Outcome:
        if outcome.terminate:
            warning = self.terminate()
            if warning and not outcome.warning:
                outcome.warning = warning
        return outcome

    def _require_running(self) -> None:
        if self._state is not SessionState.RUNNING:
            raise RuntimeError("session already terminated")
