"""Per-scenario session records held by the ScenarioEngine."""

from dataclasses import dataclass, field
from typing import List, Optional

from gitplayground.models.repo import RepositoryState


@dataclass
class HistoryEntry:
    """Pre-command snapshot used by rewind."""

    command: str
    repo: RepositoryState
    logs: List[str]
    objectives: List[bool]
    walk_index: int


@dataclass
class CommandMemory:
    """Recently submitted commands with an up/down recall cursor."""

    entries: List[str] = field(default_factory=list)
    cursor: Optional[int] = None

    def remember(self, command: str, limit: int) -> None:
        self.entries = (self.entries + [command])[-limit:]
        self.cursor = None

    def previous(self) -> str:
        if not self.entries:
            return ""
        if self.cursor is None:
            self.cursor = len(self.entries) - 1
        else:
            self.cursor = max(self.cursor - 1, 0)
        return self.entries[self.cursor]

    def next(self) -> str:
        if not self.entries or self.cursor is None:
            return ""
        following = self.cursor + 1
        if following >= len(self.entries):
            self.cursor = None
            return ""
        self.cursor = following
        return self.entries[following]


@dataclass
class ScenarioSession:
    """Everything the engine tracks for one scenario, kept in a single record."""

    scenario_id: str
    repo: RepositoryState
    logs: List[str]
    objectives: List[bool]
    started_at: float
    history: List[HistoryEntry] = field(default_factory=list)
    walk_index: int = 0
    hint_index: int = 0
    commands_run: int = 0
    hints_used: int = 0
    memory: CommandMemory = field(default_factory=CommandMemory)

    @property
    def completed_count(self) -> int:
        return sum(1 for done in self.objectives if done)

    @property
    def all_complete(self) -> bool:
        return bool(self.objectives) and all(self.objectives)

    def append_logs(self, lines: List[str], limit: int) -> None:
        combined = self.logs + lines
        self.logs = combined[-limit:] if len(combined) > limit else combined

    def push_history(self, entry: HistoryEntry, limit: int) -> None:
        self.history = (self.history + [entry])[-limit:]


@dataclass
class ScenarioSummary:
    """Payload of the one-shot "scenario complete" event."""

    scenario_id: str
    title: str
    started_at: float
    ended_at: float
    commands_run: int
    hints_used: int
    objectives: List[str]

    @property
    def elapsed(self) -> float:
        """Elapsed wall-clock seconds."""
        return max(self.ended_at - self.started_at, 0.0)


@dataclass
class CommandOutcome:
    """What the engine reports back for one handled command."""

    command: str
    output: List[str]
    state_changed: bool
    accepted: bool
    newly_completed: List[int] = field(default_factory=list)
    walk_index: int = 0
    smart_hint: str = ""
    note: str = ""
    summary: Optional[ScenarioSummary] = None
