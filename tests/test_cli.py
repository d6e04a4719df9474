"""Tests for the terminal front end."""

import sys

import pytest
from loguru import logger

from gitplayground.cli import build_engine, main, parse_args, run_meta_command


@pytest.fixture(autouse=True)
def restore_logger():
    """main() reconfigures loguru; put back a plain stderr sink afterwards."""
    yield
    logger.remove()
    logger.add(sys.__stderr__)


@pytest.fixture
def playground():
    printed = []
    engine, content = build_engine(parse_args([]), printer=printed.append)
    engine.config.playback_delay = 0
    return engine, content, printed


def test_list_scenarios(capsys):
    assert main(["--list"]) == 0

    out = capsys.readouterr().out
    assert "* first_commit" in out
    assert "sandbox" in out


def test_unknown_scenario_fails():
    assert main(["--scenario", "nope"]) == 1


def test_missing_content_fails(tmp_path):
    assert main(["--content-dir", str(tmp_path), "--list"]) == 1


def test_quit(playground):
    engine, content, _ = playground

    assert run_meta_command(engine, content, ":quit") is None


def test_help_includes_command_reference(playground):
    engine, content, _ = playground
    lines = run_meta_command(engine, content, ":help")

    assert lines[0].startswith(":help")
    assert "Basics:" in lines


def test_unknown_meta_command(playground):
    engine, content, _ = playground

    assert run_meta_command(engine, content, ":dance") == ["Unknown playground command ':dance'. Type :help for a list."]


def test_select_and_objectives(playground):
    engine, content, _ = playground

    assert run_meta_command(engine, content, ":select nope") == ["Unknown scenario: nope"]
    lines = run_meta_command(engine, content, ":select merge_conflict")
    assert lines[0] == "Scenario loaded: Resolve a merge conflict"
    assert run_meta_command(engine, content, ":objectives")[0] == "[ ] Merge feature/conflict into main"


def test_rewind_and_prev(playground):
    engine, content, _ = playground

    assert run_meta_command(engine, content, ":rewind") == ["Nothing to rewind."]
    engine.handle_command("git add readme.md")
    assert run_meta_command(engine, content, ":prev") == ["git add readme.md"]
    assert run_meta_command(engine, content, ":rewind") == ["Rewound. 0 snapshots left."]


def test_solution_prints_summary(playground):
    engine, content, printed = playground

    run_meta_command(engine, content, ":solution")

    assert engine.session.all_complete
    assert "student@decodeai:~$ git add readme.md" in printed
    assert "Scenario complete!" in printed


def test_user_prompt_lines_are_not_echoed(playground):
    engine, _, printed = playground

    engine.handle_command("git status")

    assert printed == ["On branch main", "Nothing to commit, working tree clean."]


def test_guided_and_explain(playground):
    engine, content, _ = playground

    assert run_meta_command(engine, content, ":guided on") == ["Guided mode on."]
    assert run_meta_command(engine, content, ":objectives")[-1] == "Guided: Stage the README"
    assert run_meta_command(engine, content, ":guided off") == ["Guided mode off."]
    assert run_meta_command(engine, content, ":explain git status")[0].startswith("git status compares")
    assert run_meta_command(engine, content, ":explain fly") == ["No explanation for 'fly'."]
