"""
Objective matching for playground scenarios.

A command satisfies an objective when one of the curated patterns for that
scenario and objective index matches, or otherwise when the fallback heuristic
accepts it. The fallback is deliberately permissive so learners are not blocked
by phrasing; it does produce false positives (for example any ``git status``
satisfies an objective that mentions conflicts).
"""

import re
from typing import Dict, List, Pattern, Tuple

ObjectivePatterns = List[List[Pattern[str]]]

# Sparse table: scenario id -> one list of patterns per objective index.
# Scenarios without an entry rely on fallback_match alone.
OBJECTIVE_MATCHERS: Dict[str, ObjectivePatterns] = {
    "rebase_practice": [
        [re.compile(r"^git rebase(?: origin)? main$", re.IGNORECASE)],
        [re.compile(r"^git rebase --continue$", re.IGNORECASE)],
        [re.compile(r"^git log --oneline(?: -n \d+)?$", re.IGNORECASE)],
    ],
    "undo_commit": [
        [re.compile(r"^git reset --soft head(?:\^|~1)$", re.IGNORECASE)],
        [re.compile(r"^git commit --amend(?=\s|$).*$", re.IGNORECASE)],
        [re.compile(r"^git log --oneline(?: -n \d+)?$", re.IGNORECASE)],
    ],
}

# (word in objective, command prefix)
VERB_PAIRINGS: Tuple[Tuple[str, str], ...] = (
    ("conflict", "git status"),
    ("stage", "git add"),
    ("commit", "git commit"),
    ("merge", "git merge"),
    ("reset", "git reset"),
    ("stash", "git stash"),
    ("switch", "git checkout"),
    ("tag", "git tag"),
    ("show", "git show"),
    ("rebase", "git rebase"),
    ("log", "git log"),
    ("history", "git log"),
)

_EDITOR_VERBS = re.compile(r"(nano|touch|echo)")
_GIT_PREFIX = re.compile(r"^git\s+")


def normalise_command(value: str) -> str:
    """Trim, collapse whitespace and lowercase a command line."""
    return re.sub(r"\s+", " ", value.strip()).lower()


def fallback_match(objective: str, command: str) -> bool:
    objective = objective.strip().lower()
    command = command.strip().lower()
    without_git = _GIT_PREFIX.sub("", command)

    if (
        command == objective
        or command.startswith(objective)
        or objective.startswith(command)
        or command in objective
        or objective in without_git
        or without_git in objective
    ):
        return True

    if "change" in objective and _EDITOR_VERBS.search(command):
        return True

    return any(word in objective and command.startswith(prefix) for word, prefix in VERB_PAIRINGS)


def matches(objective: str, command: str, index: int, scenario_id: str) -> bool:
    """Return True when ``command`` satisfies objective ``index`` of ``scenario_id``."""
    normalized = normalise_command(command)
    curated = OBJECTIVE_MATCHERS.get(scenario_id, [])
    if index < len(curated) and any(pattern.search(normalized) for pattern in curated[index]):
        return True
    return fallback_match(objective, normalized)
