"""Tests for the inspector and summary views."""

import pytest

from gitplayground.models.repo import Commit, RepositoryState, Tag
from gitplayground.models.session import ScenarioSummary
from gitplayground.views import format_duration, inspect_repository, render_inspection, render_summary


@pytest.mark.parametrize(
    "seconds, expected",
    [(0, "1s"), (0.2, "1s"), (42, "42s"), (59.6, "1m"), (180, "3m"), (185, "3m 5s"), (3600, "60m")],
)
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected


@pytest.fixture
def repo():
    return RepositoryState(
        branches=["main", "feature/a"],
        current_branch="feature/a",
        files={"b.txt": "", "a.txt": ""},
        staged=["b.txt"],
        commits=[
            Commit(id="c1", msg="first", branch="main", timestamp=1_700_000_000_000),
            Commit(id="c2", msg="second", branch="feature/a", timestamp=1_700_000_100_000),
        ],
        tags=[Tag(name="v1", message="one", created_at=1_700_000_200_000)],
        pending_conflict=True,
    )


def test_inspect_repository(repo):
    inspection = inspect_repository(repo)

    assert [(item.path, item.staged) for item in inspection.files] == [("a.txt", False), ("b.txt", True)]
    assert [(item.name, item.current) for item in inspection.branches] == [("feature/a", True), ("main", False)]
    assert [commit.id for commit in inspection.commits] == ["c2", "c1"]
    assert inspection.pending_conflict is True
    assert inspection.rebase_pending is False


def test_inspection_is_detached_from_repo(repo):
    inspection = inspect_repository(repo)
    inspection.commits[0].msg = "changed"

    assert repo.commits[-1].msg == "second"


def test_render_inspection(repo):
    lines = render_inspection(inspect_repository(repo))

    assert lines[0] == "Files:"
    assert "  b.txt [staged]" in lines
    assert "  feature/a [current]" in lines
    assert "Tags:" in lines
    assert lines[-1] == "Merge conflict pending."


def test_render_empty_inspection():
    lines = render_inspection(inspect_repository(RepositoryState(branches=["main"], current_branch="main")))

    assert "  No files present." in lines
    assert "  No commits yet." in lines


def test_render_summary():
    summary = ScenarioSummary(
        scenario_id="first_commit",
        title="Your first commit",
        started_at=100.0,
        ended_at=142.0,
        commands_run=3,
        hints_used=1,
        objectives=["Stage readme.md", "Commit with a message"],
    )

    lines = render_summary(summary)

    assert lines[0] == "Scenario complete!"
    assert "Elapsed time:   42s" in lines
    assert "Commands run:   3" in lines
    assert "Hints surfaced: 1" in lines
    assert lines[-2:] == ["  - Stage readme.md", "  - Commit with a message"]
