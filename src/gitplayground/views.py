"""Render-feed helpers: repository inspector snapshots and summary formatting."""

import time
from dataclasses import dataclass, field
from typing import List

from gitplayground.models.repo import Commit, RepositoryState, Tag
from gitplayground.models.session import ScenarioSummary


@dataclass
class FileView:
    path: str
    staged: bool


@dataclass
class BranchView:
    name: str
    current: bool


@dataclass
class RepoInspection:
    """Read-only view of a repository for an inspector panel."""

    files: List[FileView]
    branches: List[BranchView]
    commits: List[Commit]  # Newest first
    tags: List[Tag] = field(default_factory=list)
    pending_conflict: bool = False
    rebase_pending: bool = False


def inspect_repository(repo: RepositoryState) -> RepoInspection:
    snapshot = repo.clone()
    return RepoInspection(
        files=[FileView(path=path, staged=path in snapshot.staged) for path in sorted(snapshot.files)],
        branches=[
            BranchView(name=name, current=name == snapshot.current_branch) for name in sorted(snapshot.branches)
        ],
        commits=list(reversed(snapshot.commits)),
        tags=snapshot.tags,
        pending_conflict=snapshot.pending_conflict,
        rebase_pending=snapshot.rebase_state == "pending",
    )


def format_timestamp(timestamp_ms: int) -> str:
    return time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(timestamp_ms / 1000))


def format_duration(seconds: float) -> str:
    """Format elapsed seconds as ``42s``, ``3m`` or ``3m 5s`` (never below 1s)."""
    total = max(round(seconds), 1)
    if total < 60:
        return f"{total}s"
    minutes, remainder = divmod(total, 60)
    return f"{minutes}m {remainder}s" if remainder else f"{minutes}m"


def render_inspection(inspection: RepoInspection) -> List[str]:
    lines = ["Files:"]
    if not inspection.files:
        lines.append("  No files present.")
    lines.extend(f"  {item.path}{' [staged]' if item.staged else ''}" for item in inspection.files)

    lines.append("Branches:")
    lines.extend(f"  {item.name}{' [current]' if item.current else ''}" for item in inspection.branches)

    lines.append("Commits:")
    if not inspection.commits:
        lines.append("  No commits yet.")
    lines.extend(
        f"  {commit.id} {commit.msg} ({commit.branch}, {format_timestamp(commit.timestamp)})"
        for commit in inspection.commits
    )

    if inspection.tags:
        lines.append("Tags:")
        lines.extend(f"  {tag.name} ({format_timestamp(tag.created_at)})" for tag in inspection.tags)

    if inspection.pending_conflict:
        lines.append("Merge conflict pending.")
    if inspection.rebase_pending:
        lines.append("Rebase in progress.")
    return lines


def render_summary(summary: ScenarioSummary) -> List[str]:
    """Plain-text rendition of the scenario-complete dialog."""
    lines = [
        "Scenario complete!",
        summary.title,
        f"Elapsed time:   {format_duration(summary.elapsed)}",
        f"Commands run:   {summary.commands_run}",
        f"Hints surfaced: {summary.hints_used}",
        f"Completed:      {len(summary.objectives)} objectives",
        "Objectives reached:",
    ]
    lines.extend(f"  - {objective}" for objective in summary.objectives)
    return lines
