"""
Git command interpreter for the playground's mock repository.

Every command is parsed by splitting on whitespace and dispatched on its
subcommand to a handler with the signature ``(tokens, draft) -> CommandResult``.
Handlers operate on a clone of the caller's repository, so the input state is
never modified. Failures are reported as output lines, never raised.
"""

import re
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional

from loguru import logger

from gitplayground.models.repo import Commit, RepositoryState, StashEntry, Tag

CONFLICT_FILE = "src/App.tsx"
CONFLICT_MERGE = ("main", "feature/conflict")  # (current branch, merged branch)
TAGGER = "you@example.com"
SIMULATED_DIFF = [
    "diff --git a/file.txt b/file.txt",
    "--- a/file.txt",
    "+++ b/file.txt",
    "+ simulated change",
]

_RESET_TARGET = re.compile(r"^head(~1|\^)$")
_QUOTES = re.compile(r"^[\"']|[\"']$")


@dataclass
class CommandResult:
    """Outcome of interpreting one command line."""

    repo: RepositoryState
    output: List[str] = field(default_factory=list)
    state_changed: bool = False
    accepted: bool = False


class Subcommand(str, Enum):
    STATUS = "status"
    ADD = "add"
    COMMIT = "commit"
    BRANCH = "branch"
    CHECKOUT = "checkout"
    MERGE = "merge"
    DIFF = "diff"
    STASH = "stash"
    TAG = "tag"
    SHOW = "show"
    LOG = "log"
    RESET = "reset"
    REVERT = "revert"
    REBASE = "rebase"


Handler = Callable[[List[str], RepositoryState], CommandResult]


def _now_ms() -> int:
    return int(time.time() * 1000)


def create_commit_id() -> str:
    return f"c{uuid.uuid4().hex[:5]}"


def extract_message(tokens: List[str], flag: str) -> Optional[str]:
    """Return the text following ``flag`` with surrounding quotes removed."""
    if flag not in tokens:
        return None
    index = tokens.index(flag)
    if index + 1 >= len(tokens):
        return None
    message = _QUOTES.sub("", " ".join(tokens[index + 1 :]))
    return message or None


def _arg(tokens: List[str], position: int) -> Optional[str]:
    return tokens[position] if len(tokens) > position else None


def _fail(draft: RepositoryState, *lines: str) -> CommandResult:
    return CommandResult(repo=draft, output=list(lines))


def _ok(draft: RepositoryState, lines: List[str], changed: bool = True) -> CommandResult:
    return CommandResult(repo=draft, output=lines, state_changed=changed, accepted=True)


def _status(tokens: List[str], draft: RepositoryState) -> CommandResult:
    lines = [f"On branch {draft.current_branch}"]
    if draft.staged:
        lines.append("Changes staged for commit:")
        lines.extend(f"  staged: {path}" for path in draft.staged)
    else:
        lines.append("Nothing to commit, working tree clean.")
    if draft.pending_conflict:
        lines.append("You still have conflicts to resolve.")
    return _ok(draft, lines, changed=False)


def _add(tokens: List[str], draft: RepositoryState) -> CommandResult:
    target = _arg(tokens, 2)
    if not target:
        return _fail(draft, "git add: missing pathspec")

    if target == ".":
        for path in draft.files:
            draft.stage(path)
        return _ok(draft, ["Staged all tracked files."], changed=bool(draft.files))

    if target not in draft.files:
        return _fail(draft, f"git add: {target}: No such file")

    draft.stage(target)
    if draft.pending_conflict and target == CONFLICT_FILE:
        draft.pending_conflict = False
    return _ok(draft, [f"Added {target} to staging area."])


def _commit(tokens: List[str], draft: RepositoryState) -> CommandResult:
    message = extract_message(tokens, "-m")

    if "--amend" in tokens:
        if not message:
            return _fail(draft, 'git commit --amend: provide a message with -m "message"')
        if not draft.commits:
            return _fail(draft, "git commit --amend: no commits to amend.")
        last = draft.commits[-1]
        last.msg = message
        last.timestamp = _now_ms()
        draft.staged = []
        draft.pending_conflict = False
        return _ok(draft, [f"[{draft.current_branch}] {message} (amended)", "Updated previous commit message."])

    if not message:
        return _fail(draft, 'git commit: provide a message with -m "message"')
    if not draft.staged:
        return _fail(draft, "git commit: nothing to commit")

    draft.commits.append(
        Commit(id=create_commit_id(), msg=message, branch=draft.current_branch, timestamp=_now_ms())
    )
    draft.staged = []
    draft.pending_conflict = False
    return _ok(draft, [f"[{draft.current_branch}] {message}", "1 file changed (simulated)."])


def _branch(tokens: List[str], draft: RepositoryState) -> CommandResult:
    name = _arg(tokens, 2)
    if not name:
        lines = ["Existing branches:"]
        lines.extend(f"{'*' if branch == draft.current_branch else ' '} {branch}" for branch in draft.branches)
        return _ok(draft, lines, changed=False)

    if draft.has_branch(name):
        return _ok(draft, [f"Branch {name} already exists."], changed=False)

    draft.branches.append(name)
    return _ok(draft, [f"Created branch {name}."])


def _checkout(tokens: List[str], draft: RepositoryState) -> CommandResult:
    if _arg(tokens, 2) == "-b":
        name = _arg(tokens, 3)
        if not name:
            return _fail(draft, "git checkout -b <branch>")
        draft.ensure_branch(name)
        draft.current_branch = name
        return _ok(draft, [f"Switched to a new branch '{name}'."])

    name = _arg(tokens, 2)
    if not name:
        return _fail(draft, "git checkout: specify a branch name")
    if not draft.has_branch(name):
        return _fail(draft, f"error: pathspec '{name}' did not match any branch.")
    draft.current_branch = name
    return _ok(draft, [f"Switched to branch '{name}'."])


def _merge(tokens: List[str], draft: RepositoryState) -> CommandResult:
    name = _arg(tokens, 2)
    if not name:
        return _fail(draft, "git merge: specify a branch to merge")
    if not draft.has_branch(name):
        return _fail(draft, f"fatal: {name} - branch not found.")
    if name == draft.current_branch:
        return _fail(draft, "Already up to date.")

    if (draft.current_branch, name) == CONFLICT_MERGE:
        draft.pending_conflict = True
        return _ok(
            draft,
            [
                f"Auto-merging {CONFLICT_FILE}",
                f"CONFLICT (content): Merge conflict in {CONFLICT_FILE}",
                f"Fix conflicts and run git add {CONFLICT_FILE} before committing.",
            ],
        )

    draft.ensure_branch(name)
    return _ok(draft, [f"Merged {name} into {draft.current_branch}."])


def _diff(tokens: List[str], draft: RepositoryState) -> CommandResult:
    return _ok(draft, list(SIMULATED_DIFF), changed=False)


def _stash(tokens: List[str], draft: RepositoryState) -> CommandResult:
    if _arg(tokens, 2) == "pop":
        if not draft.stash:
            return _fail(draft, "No stash entries to apply.")
        draft.stash.pop()
        return _ok(draft, ["Restored latest stash entry and removed it from the stack."])

    draft.stash.append(
        StashEntry(id=f"stash@{{{len(draft.stash)}}}", files=dict(draft.files), branch=draft.current_branch)
    )
    draft.staged = []
    return _ok(draft, ["Saved working directory and index state (simulated)."])


def _tag(tokens: List[str], draft: RepositoryState) -> CommandResult:
    if _arg(tokens, 2) != "-a":
        return _fail(draft, "git tag: unsupported option in playground")

    name = _arg(tokens, 3)
    if not name:
        return _fail(draft, 'git tag -a <name> -m "message"')

    tag = Tag(name=name, message=extract_message(tokens, "-m") or "tag", created_at=_now_ms())
    for index, existing in enumerate(draft.tags):
        if existing.name == name:
            draft.tags[index] = tag
            break
    else:
        draft.tags.append(tag)
    return _ok(draft, [f"Annotated tag {name} created."])


def _show(tokens: List[str], draft: RepositoryState) -> CommandResult:
    ref = _arg(tokens, 2)
    if not ref:
        return _fail(draft, "git show <ref>")
    tag = draft.find_tag(ref)
    if tag is None:
        return _fail(draft, f"fatal: tag '{ref}' not found")

    created = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(tag.created_at / 1000))
    return _ok(
        draft,
        [f"tag {tag.name}", f"Tagger: {TAGGER}", f"Date:   {created}", "", tag.message],
        changed=False,
    )


def _log(tokens: List[str], draft: RepositoryState) -> CommandResult:
    if _arg(tokens, 2) != "--oneline":
        return _fail(draft, "Use git log --oneline for a concise view in this playground.")

    limit = None
    if "-n" in tokens:
        count = _arg(tokens, tokens.index("-n") + 1)
        if count is None or not count.isdigit() or int(count) == 0:
            return _fail(draft, "git log: -n expects a number of commits")
        limit = int(count)

    if not draft.commits:
        return _ok(draft, ["No commits yet."], changed=False)

    newest_first = list(reversed(draft.commits))
    if limit is not None:
        newest_first = newest_first[:limit]
    return _ok(draft, [f"{commit.id} {commit.msg}" for commit in newest_first], changed=False)


def _reset(tokens: List[str], draft: RepositoryState) -> CommandResult:
    usage = "git reset: only --soft HEAD~1 or HEAD^ is simulated."
    mode, target = _arg(tokens, 2), _arg(tokens, 3)
    if mode != "--soft" or not target or not draft.commits:
        return _fail(draft, usage)
    if not _RESET_TARGET.match(target.lower()):
        return _fail(draft, usage)

    last = draft.commits.pop()
    for path in draft.files:
        draft.stage(path)
    return _ok(draft, [f'Moved HEAD back. Previous commit "{last.msg}" is now staged.'])


def _revert(tokens: List[str], draft: RepositoryState) -> CommandResult:
    if _arg(tokens, 2) != "HEAD":
        return _fail(draft, "git revert: only HEAD is supported here.")
    draft.commits.append(
        Commit(id=create_commit_id(), msg="Revert last commit", branch=draft.current_branch, timestamp=_now_ms())
    )
    return _ok(draft, ["Created a new revert commit."])


def _rebase(tokens: List[str], draft: RepositoryState) -> CommandResult:
    onto = _arg(tokens, 2)
    if onto == "--continue":
        if draft.rebase_state != "pending":
            return _fail(draft, "No rebase in progress.")
        draft.rebase_state = None
        return _ok(draft, ["Resolved conflicts and continued the rebase."])

    if not onto:
        return _fail(draft, "git rebase <branch>")
    if not draft.has_branch(onto):
        return _fail(draft, f"fatal: {onto} - branch not found.")
    draft.rebase_state = "pending"
    return _ok(
        draft,
        [
            f"First, rewinding head to replay your work on top of {onto}.",
            "Resolve any conflicts, then run git rebase --continue.",
        ],
    )


HANDLERS: Dict[Subcommand, Handler] = {
    Subcommand.STATUS: _status,
    Subcommand.ADD: _add,
    Subcommand.COMMIT: _commit,
    Subcommand.BRANCH: _branch,
    Subcommand.CHECKOUT: _checkout,
    Subcommand.MERGE: _merge,
    Subcommand.DIFF: _diff,
    Subcommand.STASH: _stash,
    Subcommand.TAG: _tag,
    Subcommand.SHOW: _show,
    Subcommand.LOG: _log,
    Subcommand.RESET: _reset,
    Subcommand.REVERT: _revert,
    Subcommand.REBASE: _rebase,
}


def _unsupported(tokens: List[str], draft: RepositoryState) -> CommandResult:
    return _fail(draft, f"git: '{tokens[1]}' is not supported in this playground.")


def apply(command_line: str, repo: RepositoryState) -> CommandResult:
    """Interpret ``command_line`` against a copy of ``repo``."""
    draft = repo.clone()
    tokens = command_line.strip().split()
    if not tokens:
        return CommandResult(repo=draft)

    if tokens[0] != "git":
        return _fail(draft, f"{tokens[0]}: command not found")
    if len(tokens) == 1:
        return _fail(draft, "usage: git <command> [<args>]")

    try:
        handler = HANDLERS[Subcommand(tokens[1])]
    except ValueError:
        handler = _unsupported

    result = handler(tokens, draft)
    logger.debug(f"git {tokens[1]}: changed={result.state_changed} accepted={result.accepted}")
    return result

