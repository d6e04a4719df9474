"""Workflow nodes that track objective completion and guided walkthrough steps."""

from loguru import logger

from gitplayground.models.state import CommandState
from gitplayground.nodes.objectives import matches


def objectives_node(state: CommandState) -> CommandState:
    """Flip every still-open objective the command satisfies.

    Completed objectives stay completed; only reset and rewind can clear them.
    """
    completed = list(state.get("completed", []))
    objectives = state.get("objectives", [])
    if not state.get("accepted") or state.get("sandbox") or not objectives:
        return {**state, "completed": completed, "newly_completed": []}

    newly_completed = []
    for index, objective in enumerate(objectives):
        if completed[index]:
            continue
        if matches(objective, state["normalized"], index, state["scenario_id"]):
            completed[index] = True
            newly_completed.append(index)

    if newly_completed:
        logger.debug(f"Objectives completed in {state['scenario_id']}: {newly_completed}")

    return {**state, "completed": completed, "newly_completed": newly_completed}


def guided_node(state: CommandState) -> CommandState:
    """Advance the walkthrough cursor when the command starts with an expected prefix."""
    walk_index = state.get("walk_index", 0)
    expected = state.get("expected", [])
    if not state.get("guided_mode") or not state.get("accepted") or not expected:
        return {**state, "walk_index": walk_index}

    if any(state["command"].startswith(prefix) for prefix in expected):
        walk_index = min(walk_index + 1, state.get("step_count", 0))
        logger.debug(f"Guided step advanced to {walk_index}")

    return {**state, "walk_index": walk_index}
