"""Repository — one in-memory version-control instance.

A repository owns a :class:`CommitStore`, an ordered branch map and the name
of the head branch.  It is mutated only through :meth:`Repository.commit`,
:meth:`Repository.branch`, :meth:`Repository.checkout` and
:meth:`Repository.merge`; each runs under a per-repository lock that also
covers change notification.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Mapping

from gitgraph.config import DEFAULT_AUTHOR, DEFAULT_BRANCH, INITIAL_COMMIT_MESSAGE
from gitgraph.models.commit import BranchInfo, Commit, RepositorySnapshot
from gitgraph.vcs.errors import InvalidStateError, InvariantViolationError, NotFoundError
from gitgraph.vcs.hooks import ListenerSet
from gitgraph.vcs.store import CommitStore

logger = logging.getLogger(__name__)


class Repository:
    """A named commit DAG with branch pointers and a head.

    Parameters
    ----------
    name:
        Human-readable repository name.  Also prefixes commit ids.
    default_branch:
        Name of the branch the repository starts on.
    author:
        Author label recorded on every commit.
    initial_commit:
        If *True* (the default), create an empty ``Initial commit`` on the
        default branch.  If *False*, the head names an unborn branch that
        gains its first tip on the first :meth:`commit`.
    """

    def __init__(
        self,
        name: str,
        *,
        default_branch: str = DEFAULT_BRANCH,
        author: str = DEFAULT_AUTHOR,
        initial_commit: bool = True,
    ) -> None:
        self.name = name
        self.author = author
        self._store = CommitStore()
        self._branches: dict[str, str] = {}
        self._head = default_branch
        self._next_id = 0
        self._listeners = ListenerSet()
        self._lock = threading.RLock()

        if initial_commit:
            self._append_commit(INITIAL_COMMIT_MESSAGE, {}, self._parents_for_head())

        logger.debug("Created repository '%s' on branch '%s'", name, default_branch)

    # -- Internals ------------------------------------------------------------

    def _head_tip(self) -> str | None:
        return self._branches.get(self._head)

    def _parents_for_head(self) -> tuple[str, ...]:
        tip = self._head_tip()
        return (tip,) if tip is not None else ()

    def _append_commit(
        self,
        message: str,
        files: Mapping[str, str],
        parents: tuple[str, ...],
    ) -> Commit:
        """Build, store, and point the head branch at a new commit.

        The id counter only advances once the store has accepted the commit.
        """
        commit = Commit(
            id=f"{self.name}-c{self._next_id}",
            message=message,
            parents=parents,
            files=dict(files),
            author=self.author,
            sequence=self._store.next_sequence(),
        )
        self._store.add(commit)
        self._next_id += 1
        self._branches[self._head] = commit.id
        return commit

    # -- Change notification --------------------------------------------------

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register a zero-argument change listener.

        Returns a function that removes the registration.  A listener that
        raises is logged and skipped; it never undoes or rejects the mutation
        that triggered it.
        """
        return self._listeners.subscribe(callback)

    def clear_listeners(self) -> None:
        self._listeners.clear()

    # -- Mutations ------------------------------------------------------------

    def commit(self, message: str, files: Mapping[str, str] | None = None) -> str:
        """Record a new commit on the head branch.

        The file map is copied; later changes to the caller's mapping do not
        reach the store.  Returns the new commit id, even if a change listener
        fails.
        """
        with self._lock:
            commit = self._append_commit(message, files or {}, self._parents_for_head())
            logger.info("[%s] %s %s: %s", self.name, self._head, commit.id, message)
            self._listeners.notify()
            return commit.id

    def branch(self, name: str) -> None:
        """Create branch *name* at the head tip without switching to it.

        Raises
        ------
        InvalidStateError
            The head branch has no tip yet.
        InvariantViolationError
            A branch called *name* already exists.  It is left unchanged.
        """
        if not name:
            raise ValueError("branch name must not be empty")
        with self._lock:
            tip = self._head_tip()
            if tip is None:
                logger.debug("[%s] branch '%s' rejected: no commits yet", self.name, name)
                raise InvalidStateError(f"cannot create branch '{name}': no commits yet")
            if name in self._branches:
                logger.debug("[%s] branch '%s' rejected: already exists", self.name, name)
                raise InvariantViolationError(f"branch '{name}' already exists")

            self._branches[name] = tip
            logger.info("[%s] Created branch '%s' at %s", self.name, name, tip)
            self._listeners.notify()

    def checkout(self, name: str) -> None:
        """Make *name* the head branch.

        Raises :class:`NotFoundError` if the branch does not exist.
        """
        with self._lock:
            if name not in self._branches:
                logger.debug("[%s] checkout '%s' rejected: branch not found", self.name, name)
                raise NotFoundError(f"branch '{name}' not found")

            self._head = name
            logger.info("[%s] Switched to branch '%s'", self.name, name)
            self._listeners.notify()

    def merge(self, name: str) -> str | None:
        """Merge branch *name* into the head branch.

        The merge commit has parents ``[head tip, other tip]`` and carries
        the head tip's files unchanged.  Returns the merge commit id, or
        *None* when both branches already point at the same commit (nothing
        changes and no listener is called).  A failing change listener does not
        prevent the id from being returned.

        Raises
        ------
        NotFoundError
            Branch *name* does not exist.
        InvalidStateError
            The head branch has no tip yet.
        """
        with self._lock:
            other = self._branches.get(name)
            if other is None:
                logger.debug("[%s] merge '%s' rejected: branch not found", self.name, name)
                raise NotFoundError(f"branch '{name}' not found")
            base = self._head_tip()
            if base is None:
                logger.debug("[%s] merge '%s' rejected: no commits yet", self.name, name)
                raise InvalidStateError(f"cannot merge '{name}': no commits yet")
            if base == other:
                logger.debug("[%s] merge '%s': already up to date", self.name, name)
                return None

            commit = self._append_commit(
                f"Merge branch '{name}' into {self._head}",
                self._store.get(base).files,
                (base, other),
            )
            logger.info("[%s] Merged '%s' -> '%s' (%s)", self.name, name, self._head, commit.id)
            self._listeners.notify()
            return commit.id

    # -- Queries --------------------------------------------------------------

    @property
    def head(self) -> str:
        """Name of the current branch."""
        return self._head

    def head_commit(self) -> Commit | None:
        with self._lock:
            tip = self._head_tip()
            return self._store.get(tip) if tip is not None else None

    def get_commit(self, commit_id: str) -> Commit:
        with self._lock:
            return self._store.get(commit_id)

    def branches(self) -> dict[str, str]:
        """Return a copy of the branch map in creation order."""
        with self._lock:
            return dict(self._branches)

    def list_branches(self) -> list[BranchInfo]:
        with self._lock:
            return [
                BranchInfo(name=name, commit_id=tip, is_current=name == self._head)
                for name, tip in self._branches.items()
            ]

    def commits(self) -> list[Commit]:
        """Return the first-parent history of the head, newest first."""
        with self._lock:
            result: list[Commit] = []
            current = self._store.find(self._head_tip() or "")
            while current is not None:
                result.append(current)
                if current.is_root:
                    break
                current = self._store.find(current.parents[0])
            return result

    def all_commits(self) -> list[Commit]:
        """Return every stored commit in creation order."""
        with self._lock:
            return self._store.all()

    def reachable_commits(self) -> list[Commit]:
        """Return every commit reachable from any branch tip."""
        with self._lock:
            return self._store.reachable_from(list(self._branches.values()))

    def snapshot(self) -> RepositorySnapshot:
        """Return a consistent, immutable view for the layout engine."""
        with self._lock:
            return RepositorySnapshot(
                name=self.name,
                head=self._head,
                branches=dict(self._branches),
                commits=tuple(self._store.reachable_from(list(self._branches.values()))),
            )

    def __len__(self) -> int:
        return len(self._store)

    def __repr__(self) -> str:
        return f"Repository(name={self.name!r}, head={self._head!r}, commits={len(self._store)})"
