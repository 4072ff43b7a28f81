"""History and log queries over a repository's commit DAG.

Log queries follow the first-parent chain, so a merge shows up as a single
entry on the branch it was merged into.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from gitgraph.models.commit import Commit
from gitgraph.vcs.errors import NotFoundError
from gitgraph.vcs.repo import Repository

logger = logging.getLogger(__name__)


@dataclass
class LogEntry:
    """A single entry of a commit log."""

    commit_id: str
    author: str
    date: str
    message: str
    parents: list[str] = field(default_factory=list)

    @classmethod
    def from_commit(cls, commit: Commit) -> LogEntry:
        return cls(
            commit_id=commit.id,
            author=commit.author,
            date=commit.timestamp.isoformat(),
            message=commit.message,
            parents=list(commit.parents),
        )


def _first_parent_walk(repo: Repository, start: str, max_count: int | None) -> list[LogEntry]:
    entries: list[LogEntry] = []
    commit: Commit | None = repo.get_commit(start)
    while commit is not None:
        if max_count is not None and len(entries) >= max_count:
            break
        entries.append(LogEntry.from_commit(commit))
        commit = repo.get_commit(commit.parents[0]) if commit.parents else None
    return entries


def get_history(repo: Repository, max_count: int | None = None) -> list[LogEntry]:
    """Return the head branch's log, newest first.

    Parameters
    ----------
    repo:
        The repository.
    max_count:
        Maximum number of entries to return.  *None* means no limit.

    Returns an empty list for a repository with no commits.
    """
    tip = repo.branches().get(repo.head)
    if tip is None:
        return []
    return _first_parent_walk(repo, tip, max_count)


def get_branch_history(
    repo: Repository,
    branch: str,
    max_count: int | None = None,
) -> list[LogEntry]:
    """Return the log of *branch*, newest first.

    Raises :class:`NotFoundError` if the branch does not exist.
    """
    tip = repo.branches().get(branch)
    if tip is None:
        raise NotFoundError(f"branch '{branch}' not found")
    return _first_parent_walk(repo, tip, max_count)


def is_ancestor(repo: Repository, ancestor: str, descendant: str) -> bool:
    """Return *True* if *ancestor* is reachable from *descendant* over any parent.

    A commit counts as its own ancestor.
    """
    repo.get_commit(ancestor)
    stack = [descendant]
    seen: set[str] = set()
    while stack:
        commit_id = stack.pop()
        if commit_id == ancestor:
            return True
        if commit_id in seen:
            continue
        seen.add(commit_id)
        stack.extend(repo.get_commit(commit_id).parents)
    return False
