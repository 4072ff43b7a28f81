"""CommitStore — append-only ledger of commits keyed by id."""

from __future__ import annotations

import logging
from typing import Iterator

from gitgraph.models.commit import Commit
from gitgraph.vcs.errors import InvariantViolationError, NotFoundError

logger = logging.getLogger(__name__)


class CommitStore:
    """Hold every commit a repository has ever created.

    Commits are kept in insertion order, which is also sequence order.
    Nothing is ever removed: unreachable commits stay in the store.
    """

    def __init__(self) -> None:
        self._commits: dict[str, Commit] = {}
        self._next_sequence = 0

    def next_sequence(self) -> int:
        """Return the sequence number the next added commit must carry."""
        return self._next_sequence

    def add(self, commit: Commit) -> Commit:
        """Append *commit*.

        Raises :class:`InvariantViolationError` if the id is already taken,
        a parent is unknown, or the sequence number is out of order.
        """
        if commit.id in self._commits:
            raise InvariantViolationError(f"commit '{commit.id}' already exists")
        missing = [p for p in commit.parents if p not in self._commits]
        if missing:
            raise InvariantViolationError(
                f"commit '{commit.id}' references unknown parent(s): {', '.join(missing)}"
            )
        if commit.sequence != self._next_sequence:
            raise InvariantViolationError(
                f"commit '{commit.id}' has sequence {commit.sequence}, "
                f"expected {self._next_sequence}"
            )

        self._commits[commit.id] = commit
        self._next_sequence += 1
        logger.debug("Stored commit %s (parents=%s)", commit.id, list(commit.parents))
        return commit

    def get(self, commit_id: str) -> Commit:
        try:
            return self._commits[commit_id]
        except KeyError:
            raise NotFoundError(f"commit '{commit_id}' not found") from None

    def find(self, commit_id: str) -> Commit | None:
        return self._commits.get(commit_id)

    def all(self) -> list[Commit]:
        """Return every commit in creation order."""
        return list(self._commits.values())

    def reachable_from(self, tips: list[str]) -> list[Commit]:
        """Return every commit reachable from *tips* over all parents.

        Each commit appears once; the result is in creation order.
        """
        seen: set[str] = set()
        stack = [t for t in tips if t in self._commits]
        while stack:
            commit_id = stack.pop()
            if commit_id in seen:
                continue
            seen.add(commit_id)
            stack.extend(self._commits[commit_id].parents)
        return [c for c in self._commits.values() if c.id in seen]

    def __contains__(self, commit_id: object) -> bool:
        return commit_id in self._commits

    def __len__(self) -> int:
        return len(self._commits)

    def __iter__(self) -> Iterator[Commit]:
        return iter(list(self._commits.values()))
