# tests/test_session.py

from __future__ import annotations

import dataclasses
import json

import pytest

from taskmaster.core.session import Session, SessionState
from taskmaster.core.state import AppState

from .fakes import FailingSaveStore


def test_commands_keep_session_running(state: AppState) -> None:
    session = Session(state)
    assert session.state is SessionState.RUNNING
    session.feed("add a")
    session.feed("")
    session.feed("nonsense")
    session.feed("complete 7")
    assert session.running


def test_execute_always_returns_an_outcome(state: AppState) -> None:
    session = Session(state)
    out = session.execute("add", ["a"])
    assert out.ok and out.message == "Added task #1: a"
    out = session.execute("complete", ["9"])
    assert not out.ok
    out = session.execute("quit", [])
    assert out.terminate
    assert session.state is SessionState.TERMINATED


def test_quit_terminates_and_rejects_more_input(state: AppState) -> None:
    session = Session(state)
    out = session.feed("q")
    assert out is not None and out.terminate
    assert session.state is SessionState.TERMINATED
    with pytest.raises(RuntimeError):
        session.feed("list")
    with pytest.raises(RuntimeError):
        session.execute("list", [])


def test_final_save_in_exit_mode(settings, store) -> None:
    state = AppState(settings=dataclasses.replace(settings, save_mode="exit"), store=store)
    session = Session(state)
    session.feed("add one")
    session.feed("add two")
    assert not settings.tasks_file.exists()

    assert session.terminate() is None
    descs = [r["description"] for r in json.loads(settings.tasks_file.read_text("utf-8"))]
    assert descs == ["one", "two"]


def test_terminate_is_idempotent(settings) -> None:
    store = FailingSaveStore(settings.tasks_file)
    state = AppState(settings=dataclasses.replace(settings, save_mode="exit"), store=store)
    session = Session(state)
    session.execute("add", ["x"])

    first = session.terminate()
    assert first is not None and "disk full" in first
    assert session.terminate() == first
    assert store.save_calls == 1


def test_quit_reports_failed_final_save(settings) -> None:
    store = FailingSaveStore(settings.tasks_file)
    state = AppState(settings=dataclasses.replace(settings, save_mode="exit"), store=store)
    session = Session(state)
    session.feed("add x")
    out = session.feed("exit")
    assert out is not None
    assert out.ok and out.terminate
    assert out.warning is not None and out.warning.startswith("Warning:")


def test_clean_session_does_not_rewrite_file(state: AppState, settings) -> None:
    session = Session(state)
    session.feed("list")
    session.terminate()
    assert not settings.tasks_file.exists()
