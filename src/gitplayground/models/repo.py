"""Mock repository types used by the playground simulator."""

import copy
from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class Commit:
    """A single simulated commit."""

    id: str
    msg: str
    branch: str
    timestamp: int  # epoch milliseconds


@dataclass
class Tag:
    """An annotated tag. Names are unique within a repository."""

    name: str
    message: str
    created_at: int


@dataclass
class StashEntry:
    """Snapshot of the working tree pushed by ``git stash``."""

    id: str
    files: Dict[str, str]
    branch: str


@dataclass
class RepositoryState:
    """In-memory repository a scenario session operates on.

    Commands never edit a state in place; they work on a ``clone()`` so
    earlier snapshots held by the undo history stay valid.
    """

    branches: List[str]
    current_branch: str
    files: Dict[str, str] = field(default_factory=dict)
    staged: List[str] = field(default_factory=list)
    commits: List[Commit] = field(default_factory=list)
    tags: List[Tag] = field(default_factory=list)
    stash: List[StashEntry] = field(default_factory=list)
    pending_conflict: bool = False
    rebase_state: Optional[str] = None  # "pending" while a rebase awaits --continue

    def clone(self) -> "RepositoryState":
        """Return a deep, independent copy."""
        return copy.deepcopy(self)

    def has_branch(self, name: str) -> bool:
        return name in self.branches

    def ensure_branch(self, name: str) -> None:
        if name not in self.branches:
            self.branches.append(name)

    def stage(self, path: str) -> None:
        if path not in self.staged:
            self.staged.append(path)

    def find_tag(self, name: str) -> Optional[Tag]:
        return next((tag for tag in self.tags if tag.name == name), None)
