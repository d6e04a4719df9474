"""Smart hints, command notes and explanations looked up from static content."""

from dataclasses import dataclass, field
from typing import Dict

from gitplayground.models.scenario import SmartHintPack
from gitplayground.nodes.objectives import normalise_command


def find_longest_prefix(table: Dict[str, str], command: str) -> str:
    """Return the value whose key is the longest prefix of ``command``."""
    normalized = normalise_command(command)
    match = ""
    for key in table:
        if normalized.startswith(key) and len(key) > len(match):
            match = key
    return table[match] if match else ""


@dataclass
class HintBook:
    smart_hints: Dict[str, SmartHintPack] = field(default_factory=dict)
    notes: Dict[str, str] = field(default_factory=dict)
    explanations: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        # Lookup keys are stored in the same normalized form as commands.
        self.notes = {normalise_command(key): value for key, value in self.notes.items()}
        self.explanations = {normalise_command(key): value for key, value in self.explanations.items()}

    def smart_hint(self, scenario_id: str, command: str) -> str:
        """Nudge for a command the learner is about to run, or an empty string."""
        pack = self.smart_hints.get(scenario_id)
        normalized = normalise_command(command)
        if pack is None or not normalized:
            return ""

        for mistake in pack.common_mistakes:
            wrong = normalise_command(mistake.wrong)
            if normalized == wrong or normalized.startswith(f"{wrong} "):
                return mistake.hint

        for expected in pack.expected:
            candidate = normalise_command(expected)
            if normalized == candidate:
                return ""
            if candidate.startswith(normalized) and len(normalized) >= 3:
                return f"Almost there. Try {expected}"

        return ""

    def command_note(self, command: str) -> str:
        return find_longest_prefix(self.notes, command)

    def explain(self, command: str) -> str:
        return find_longest_prefix(self.explanations, command)
