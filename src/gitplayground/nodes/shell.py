"""Pseudo-shell verbs (nano, touch, echo) recognised before the git interpreter."""

from typing import Optional

from gitplayground.models.repo import RepositoryState
from gitplayground.nodes.simulator import CommandResult

EDIT_MARKER = "// edited"
SHELL_VERBS = ("nano", "touch", "echo")


def run_shell_verb(command_line: str, repo: RepositoryState) -> Optional[CommandResult]:
    """Simulate a shell verb, or return None when the line is not one.

    ``nano`` marks a file as edited and stages it, ``touch`` creates and stages
    an empty file, and ``echo`` only acknowledges the input.
    """
    verb, _, rest = command_line.strip().partition(" ")
    verb = verb.lower()
    if verb not in SHELL_VERBS:
        return None

    draft = repo.clone()
    path = rest.strip()

    if verb == "echo":
        return CommandResult(repo=draft, output=["[echo] Output captured (simulation only)."], accepted=True)

    if verb == "nano":
        if not path:
            return CommandResult(repo=draft, output=["nano: provide a file path."])
        existing = draft.files.get(path, "")
        if EDIT_MARKER not in existing:
            draft.files[path] = f"{existing}{EDIT_MARKER} (simulated)\n"
        draft.stage(path)
        return CommandResult(
            repo=draft, output=[f"[nano] Edited {path} (simulated)."], state_changed=True, accepted=True
        )

    if not path:
        return CommandResult(repo=draft, output=["touch: provide a file name."])
    draft.files.setdefault(path, "")
    draft.stage(path)
    return CommandResult(repo=draft, output=[f"[touch] Created {path} (simulated)."], state_changed=True, accepted=True)
