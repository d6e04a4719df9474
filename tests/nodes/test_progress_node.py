"""Tests for the objective and guided walkthrough nodes."""

import pytest

from gitplayground.models.state import CommandState
from gitplayground.nodes.progress_node import guided_node, objectives_node


@pytest.fixture
def base_state() -> CommandState:
    return {
        "command": "git add readme.md",
        "normalized": "git add readme.md",
        "scenario_id": "first_commit",
        "sandbox": False,
        "objectives": ["Stage readme.md", "Commit with a message", "Review the history"],
        "completed": [False, False, False],
        "accepted": True,
        "guided_mode": True,
        "expected": ["git add readme.md", "git add ."],
        "walk_index": 0,
        "step_count": 3,
        "errors": [],
    }


def test_objective_flips_on_accepted_command(base_state):
    result = objectives_node(base_state)

    assert result["completed"] == [True, False, False]
    assert result["newly_completed"] == [0]
    assert base_state["completed"] == [False, False, False]


def test_completed_objectives_stay_completed(base_state):
    state = {**base_state, "command": "git status", "normalized": "git status", "completed": [True, False, False]}
    result = objectives_node(state)

    assert result["completed"] == [True, False, False]
    assert result["newly_completed"] == []


@pytest.mark.parametrize("override", [{"accepted": False}, {"sandbox": True}, {"objectives": [], "completed": []}])
def test_objectives_untouched(base_state, override):
    result = objectives_node({**base_state, **override})

    assert result["newly_completed"] == []
    assert not any(result["completed"])


def test_guided_step_advances_on_expected_prefix(base_state):
    assert guided_node(base_state)["walk_index"] == 1


def test_guided_step_clamped_to_step_count(base_state):
    state = {**base_state, "walk_index": 3}
    assert guided_node(state)["walk_index"] == 3


@pytest.mark.parametrize(
    "override",
    [
        {"guided_mode": False},
        {"accepted": False},
        {"command": "git status"},
        {"expected": []},
    ],
)
def test_guided_step_does_not_advance(base_state, override):
    assert guided_node({**base_state, **override})["walk_index"] == 0
