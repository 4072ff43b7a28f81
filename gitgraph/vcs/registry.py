"""RepositoryRegistry — create, switch between, and delete repositories."""

from __future__ import annotations

import logging
from typing import Callable

from gitgraph.config import DEFAULT_AUTHOR, DEFAULT_BRANCH
from gitgraph.vcs.errors import InvariantViolationError, NotFoundError
from gitgraph.vcs.hooks import ListenerSet
from gitgraph.vcs.repo import Repository

logger = logging.getLogger(__name__)


class RepositoryRegistry:
    """Own a set of repositories and track which one is active.

    Once a repository exists the registry never drops below one, and an
    active repository is always set.  Registry listeners are independent of
    the listeners of individual repositories.

    Parameters
    ----------
    default_branch, author:
        Passed to every repository the registry creates.
    """

    def __init__(
        self,
        *,
        default_branch: str = DEFAULT_BRANCH,
        author: str = DEFAULT_AUTHOR,
    ) -> None:
        self._default_branch = default_branch
        self._author = author
        self._repos: dict[str, Repository] = {}
        self._active_id: str | None = None
        self._next_id = 0
        self._listeners = ListenerSet()

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        return self._listeners.subscribe(callback)

    # -- Mutations ------------------------------------------------------------

    def create(self, name: str) -> str:
        """Create a repository and return its id.

        The first repository created becomes active.
        """
        repo_id = f"repo-{self._next_id}"
        self._next_id += 1
        self._repos[repo_id] = Repository(
            name, default_branch=self._default_branch, author=self._author,
        )
        if self._active_id is None:
            self._active_id = repo_id

        logger.info("Created repository '%s' (%s)", name, repo_id)
        self._listeners.notify()
        return repo_id

    create_repository = create

    def switch_to(self, repo_id: str) -> None:
        """Make *repo_id* the active repository.

        Switching to the already-active repository does nothing.  Raises
        :class:`NotFoundError` for an unknown id.
        """
        if repo_id not in self._repos:
            logger.debug("switch to '%s' rejected: unknown repository", repo_id)
            raise NotFoundError(f"repository '{repo_id}' not found")
        if repo_id == self._active_id:
            return

        self._active_id = repo_id
        logger.info("Switched to repository '%s'", repo_id)
        self._listeners.notify()

    def delete(self, repo_id: str) -> None:
        """Delete a repository.

        If it was active, the earliest-created remaining repository becomes
        active.

        Raises
        ------
        NotFoundError
            *repo_id* is unknown.
        InvariantViolationError
            *repo_id* is the last remaining repository.
        """
        if repo_id not in self._repos:
            logger.debug("delete '%s' rejected: unknown repository", repo_id)
            raise NotFoundError(f"repository '{repo_id}' not found")
        if len(self._repos) <= 1:
            logger.debug("delete '%s' rejected: last repository", repo_id)
            raise InvariantViolationError("cannot delete the last repository")

        repo = self._repos.pop(repo_id)
        repo.clear_listeners()
        if self._active_id == repo_id:
            self._active_id = next(iter(self._repos))

        logger.info("Deleted repository '%s' (%s)", repo.name, repo_id)
        self._listeners.notify()

    delete_repository = delete

    def close(self) -> None:
        """Drop every listener on the registry and its repositories."""
        for repo in self._repos.values():
            repo.clear_listeners()
        self._listeners.clear()

    # -- Queries --------------------------------------------------------------

    def get(self, repo_id: str) -> Repository:
        try:
            return self._repos[repo_id]
        except KeyError:
            raise NotFoundError(f"repository '{repo_id}' not found") from None

    def get_active(self) -> Repository | None:
        if self._active_id is None:
            return None
        return self._repos[self._active_id]

    @property
    def active_id(self) -> str | None:
        return self._active_id

    @property
    def active_name(self) -> str:
        """Name of the active repository, or ``"none"``."""
        repo = self.get_active()
        return repo.name if repo is not None else "none"

    def list_all(self) -> dict[str, Repository]:
        """Return id -> repository in creation order."""
        return dict(self._repos)

    def __len__(self) -> int:
        return len(self._repos)

    def __contains__(self, repo_id: object) -> bool:
        return repo_id in self._repos
