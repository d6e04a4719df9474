"""State container passed between the command workflow nodes."""

from typing import Any, Dict, List, TypedDict

from gitplayground.models.repo import RepositoryState


class CommandState(TypedDict, total=False):
    """State for one pass of a command through the workflow.

    Using TypedDict for LangGraph compatibility. total=False means all fields
    are optional.
    """

    # Input
    command: str  # Trimmed command line as submitted
    normalized: str  # Lowercased, whitespace-collapsed command
    repo: RepositoryState  # Repository before the command
    scenario_id: str
    sandbox: bool
    objectives: List[str]  # Objective texts in declaration order
    completed: List[bool]  # Completion flags before the command

    # Guided walkthrough
    guided_mode: bool
    expected: List[str]  # Expected prefixes of the current step
    walk_index: int
    step_count: int

    # Interpreter output
    handled: bool  # True once a pseudo-shell verb consumed the command
    output: List[str]
    state_changed: bool
    accepted: bool  # Command ran a success path and may satisfy objectives

    # Progress output
    newly_completed: List[int]

    # Global
    errors: List[Dict[str, Any]]
