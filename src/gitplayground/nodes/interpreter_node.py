"""Workflow nodes that turn a submitted command into output and a new repository."""

from datetime import datetime

from loguru import logger

from gitplayground.models.state import CommandState
from gitplayground.nodes import simulator
from gitplayground.nodes.shell import run_shell_verb


def _failure(state: CommandState, node: str, error: Exception) -> CommandState:
    logger.error(f"Error in {node} for '{state.get('command', '')}': {str(error)}")
    errors = list(state.get("errors", []))
    errors.append({"node": node, "error": str(error), "timestamp": datetime.now()})
    return {
        **state,
        "handled": True,
        "output": [f"error: the playground could not run '{state.get('command', '')}'."],
        "state_changed": False,
        "accepted": False,
        "errors": errors,
    }


def shell_node(state: CommandState) -> CommandState:
    """Simulate nano/touch/echo before anything reaches the git interpreter."""
    try:
        result = run_shell_verb(state["command"], state["repo"])
        if result is None:
            return {**state, "handled": False}

        logger.debug(f"Shell verb handled: {state['command']}")
        return {
            **state,
            "handled": True,
            "repo": result.repo,
            "output": result.output,
            "state_changed": result.state_changed,
            "accepted": result.accepted,
        }
    except Exception as e:
        return _failure(state, "shell_node", e)


def route_after_shell(state: CommandState) -> str:
    return "evaluate" if state.get("handled") else "interpret"


def interpreter_node(state: CommandState) -> CommandState:
    """Run the command through the git simulator."""
    try:
        result = simulator.apply(state["command"], state["repo"])
        return {
            **state,
            "repo": result.repo,
            "output": result.output,
            "state_changed": result.state_changed,
            "accepted": result.accepted,
        }
    except Exception as e:
        return _failure(state, "interpreter_node", e)
