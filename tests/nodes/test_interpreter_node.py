"""Tests for the shell and interpreter workflow nodes."""

from unittest.mock import patch

import pytest

from gitplayground.models.repo import RepositoryState
from gitplayground.nodes.interpreter_node import interpreter_node, route_after_shell, shell_node


@pytest.fixture
def state():
    return {
        "command": "git add readme.md",
        "repo": RepositoryState(branches=["main"], current_branch="main", files={"readme.md": ""}),
        "errors": [],
    }


def test_shell_node_passes_git_commands_on(state):
    result = shell_node(state)

    assert result["handled"] is False
    assert route_after_shell(result) == "interpret"


def test_shell_node_handles_editor_verbs(state):
    result = shell_node({**state, "command": "touch notes.txt"})

    assert result["handled"] is True
    assert route_after_shell(result) == "evaluate"
    assert "notes.txt" in result["repo"].files
    assert result["accepted"] is True


def test_interpreter_node_applies_command(state):
    result = interpreter_node(state)

    assert result["output"] == ["Added readme.md to staging area."]
    assert result["repo"].staged == ["readme.md"]
    assert result["state_changed"] is True
    assert state["repo"].staged == []


def test_interpreter_node_records_errors(state):
    with patch("gitplayground.nodes.simulator.apply", side_effect=RuntimeError("boom")):
        result = interpreter_node(state)

    assert result["output"] == ["error: the playground could not run 'git add readme.md'."]
    assert result["state_changed"] is False
    assert result["accepted"] is False
    assert len(result["errors"]) == 1
    assert result["errors"][0]["node"] == "interpreter_node"
    assert result["errors"][0]["error"] == "boom"
    assert result["repo"] is state["repo"]
