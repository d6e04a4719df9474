"""
Scenario content models.

Scenario definitions come from static JSON authored with camelCase keys, so
every model accepts both the alias and the Python field name. Missing optional
collections default to empty and are normalized when a repository is built.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from gitplayground.models.repo import Commit, RepositoryState, StashEntry, Tag


class CommitSeed(BaseModel):
    """A commit as it appears in an initial repository snapshot."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Short commit id")
    msg: str = Field(..., description="Commit message")
    branch: str = Field("main", description="Branch the commit was made on")
    timestamp: Optional[int] = Field(None, description="Epoch milliseconds")


class TagSeed(BaseModel):
    """A tag as it appears in an initial repository snapshot."""

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    message: str = ""
    created_at: Optional[int] = Field(None, alias="createdAt")


class StashSeed(BaseModel):
    """A stash entry as it appears in an initial repository snapshot."""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    files: Dict[str, str] = Field(default_factory=dict)
    branch: Optional[str] = None


class InitialRepo(BaseModel):
    """Starting repository of a scenario."""

    model_config = ConfigDict(populate_by_name=True)

    branches: List[str] = Field(default_factory=lambda: ["main"])
    current_branch: Optional[str] = Field(None, alias="currentBranch")
    files: Dict[str, str] = Field(default_factory=dict)
    staged: List[str] = Field(default_factory=list)
    commits: List[CommitSeed] = Field(default_factory=list)
    tags: List[TagSeed] = Field(default_factory=list)
    stash: List[StashSeed] = Field(default_factory=list)

    def to_repository(self, now_ms: int) -> RepositoryState:
        """Build a fresh RepositoryState, filling in anything the content left out."""
        branches = list(self.branches) or ["main"]
        current = self.current_branch or branches[0]
        if current not in branches:
            branches.append(current)

        return RepositoryState(
            branches=branches,
            current_branch=current,
            files=dict(self.files),
            staged=list(dict.fromkeys(self.staged)),
            commits=[
                Commit(
                    id=seed.id,
                    msg=seed.msg,
                    branch=seed.branch,
                    timestamp=seed.timestamp if seed.timestamp is not None else now_ms,
                )
                for seed in self.commits
            ],
            tags=[
                Tag(
                    name=seed.name or f"v{index + 1}.0",
                    message=seed.message,
                    created_at=seed.created_at if seed.created_at is not None else now_ms,
                )
                for index, seed in enumerate(self.tags)
            ],
            stash=[
                StashEntry(
                    id=seed.id or f"stash@{{{index}}}",
                    files=dict(seed.files),
                    branch=seed.branch or current,
                )
                for index, seed in enumerate(self.stash)
            ],
        )


class Scenario(BaseModel):
    """A pre-authored learning exercise."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(..., description="Stable scenario identifier")
    title: str = Field(..., description="Display title")
    goal: str = Field("", description="What the learner should achieve")
    sandbox: bool = Field(False, description="Free exploration, no objectives")
    initial_repo: InitialRepo = Field(default_factory=InitialRepo, alias="initialRepo")
    objectives: List[str] = Field(default_factory=list)
    solution: List[str] = Field(default_factory=list)
    hints: List[str] = Field(default_factory=list)

    def intro_lines(self) -> List[str]:
        """The three canned lines a fresh session log starts with."""
        return [
            f"Scenario loaded: {self.title}",
            self.goal,
            "Sandbox mode: experiment freely."
            if self.sandbox
            else "Use the objectives list to track your progress.",
        ]


class GuidedStep(BaseModel):
    """One step of a guided walkthrough; ``expected`` holds command prefixes."""

    title: str
    expected: List[str] = Field(default_factory=list)


class CommonMistake(BaseModel):
    wrong: str
    hint: str


class SmartHintPack(BaseModel):
    """Per-scenario nudges shown while the learner types."""

    model_config = ConfigDict(populate_by_name=True)

    expected: List[str] = Field(default_factory=list)
    common_mistakes: List[CommonMistake] = Field(default_factory=list, alias="commonMistakes")
