# tests/test_main.py

from __future__ import annotations

import dataclasses
import json
from pathlib import Path

import pytest

from taskmaster.cli import main as cli_main


@pytest.fixture(autouse=True)
def _no_logging_setup(monkeypatch: pytest.MonkeyPatch) -> None:
    # setup_logging() replaces root handlers, which would fight pytest's capture.
    monkeypatch.setattr(cli_main, "setup_logging", lambda **kwargs: None)


def test_one_shot_commands(settings, capsys) -> None:
    assert cli_main.main(["add", "Buy", "groceries"], settings=settings) == 0
    assert cli_main.main(["up", "1"], settings=settings) == 0
    assert cli_main.main(["l"], settings=settings) == 0

    out = capsys.readouterr().out
    assert "Added task #1: Buy groceries" in out
    assert "1: ▲ [·] Buy groceries" in out

    data = json.loads(settings.tasks_file.read_text("utf-8"))
    assert data == [{"description": "Buy groceries", "completed": False, "priority": "High"}]


def test_one_shot_in_exit_mode_still_saves(settings) -> None:
    settings = dataclasses.replace(settings, save_mode="exit")
    assert cli_main.main(["a", "x"], settings=settings) == 0
    assert cli_main.main(["c", "1"], settings=settings) == 0
    assert json.loads(settings.tasks_file.read_text("utf-8"))[0]["completed"] is True


def test_user_errors_exit_zero(settings, capsys) -> None:
    assert cli_main.main(["complete", "5"], settings=settings) == 0
    assert cli_main.main(["delete", "two"], settings=settings) == 0
    err = capsys.readouterr().err
    assert "Task 5 not found" in err
    assert "'two' is not a valid task ID" in err


def test_change_and_clear(settings, capsys) -> None:
    cli_main.main(["add", "a"], settings=settings)
    cli_main.main(["add", "b"], settings=settings)
    cli_main.main(["ch", "2", "bee"], settings=settings)
    cli_main.main(["complete", "1"], settings=settings)
    cli_main.main(["clr"], settings=settings)
    data = json.loads(settings.tasks_file.read_text("utf-8"))
    assert data == [{"description": "bee", "completed": False, "priority": "Medium"}]
    assert "Cleared 1 completed tasks." in capsys.readouterr().out


def test_corrupt_file_is_fatal_in_strict_mode(settings, capsys) -> None:
    settings.tasks_file.write_text("{oops", "utf-8")
    assert cli_main.main(["list"], settings=settings) == 1
    assert capsys.readouterr().err.startswith("Error: Error parsing task file")
    assert settings.tasks_file.read_text("utf-8") == "{oops"


def test_corrupt_file_is_ignored_when_not_strict(settings, capsys) -> None:
    settings = dataclasses.replace(settings, strict_load=False)
    settings.tasks_file.write_text("{oops", "utf-8")
    assert cli_main.main(["list"], settings=settings) == 0
    assert "No tasks, all done!" in capsys.readouterr().out


def test_undecodable_file_is_fatal_in_strict_mode(settings, capsys) -> None:
    settings.tasks_file.write_bytes(b"\xff\xfe garbage")
    assert cli_main.main(["list"], settings=settings) == 1
    assert capsys.readouterr().err.startswith("Error: Could not read task file")
    assert settings.tasks_file.read_bytes() == b"\xff\xfe garbage"


def test_undecodable_file_is_ignored_when_not_strict(settings, capsys) -> None:
    settings = dataclasses.replace(settings, strict_load=False)
    settings.tasks_file.write_bytes(b"\xff\xfe garbage")
    assert cli_main.main(["list"], settings=settings) == 0
    assert "No tasks, all done!" in capsys.readouterr().out


def test_undecodable_argument_is_a_user_error(settings, capsys) -> None:
    assert cli_main.main(["add", "caf\udce9"], settings=settings) == 0
    assert "not valid UTF-8" in capsys.readouterr().err
    assert not settings.tasks_file.exists()


def test_unresolvable_home_is_fatal(settings, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    def no_home(cls=None):
        raise RuntimeError("Could not determine home directory.")

    monkeypatch.setattr(Path, "home", classmethod(no_home))
    settings = dataclasses.replace(settings, tasks_file=None)
    assert cli_main.main(["list"], settings=settings) == 1
    assert "Could not determine home directory" in capsys.readouterr().err


def test_no_command_prints_help(settings, capsys) -> None:
    assert cli_main.main([], settings=settings) == 2
    assert "usage: taskmaster" in capsys.readouterr().err


def test_usage_errors_exit_two(settings) -> None:
    with pytest.raises(SystemExit) as exc:
        cli_main.main(["add"], settings=settings)
    assert exc.value.code == 2


def test_interactive_mode(settings, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    lines = iter(["add from repl", "quit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))
    assert cli_main.main(["i"], settings=settings) == 0
    assert "Added task #1: from repl" in capsys.readouterr().out
    assert settings.tasks_file.exists()
