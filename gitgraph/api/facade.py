"""GitGraph — the application context for all gitgraph operations.

Usage::

    from gitgraph import GitGraph

    app = GitGraph()
    app.commit("Add readme", {"README.md": "hello"})
    app.branch("feature")
    app.checkout("feature")
    app.commit("Work on feature")
    app.checkout("main")
    app.merge("feature")
    layout = app.layout()
    app.close()
"""

from __future__ import annotations

import logging
from typing import Callable, Mapping

from gitgraph.config import DEFAULT_REPOSITORY_NAME, Settings, configure_logging
from gitgraph.layout.engine import layout_repository
from gitgraph.layout.graph import GraphLayout
from gitgraph.models.commit import BranchInfo, Commit
from gitgraph.vcs.errors import InvalidStateError
from gitgraph.vcs.history import LogEntry, get_history
from gitgraph.vcs.registry import RepositoryRegistry
from gitgraph.vcs.repo import Repository

logger = logging.getLogger(__name__)


class GitGraph:
    """Hold a repository registry and act on its active repository.

    Construct one per application; call :meth:`close` when done.

    Parameters
    ----------
    settings:
        Runtime settings.  Defaults to :meth:`Settings.from_env`.
    initial_repository:
        Name of the repository created at start-up.  Pass *None* to start
        with an empty registry.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        initial_repository: str | None = DEFAULT_REPOSITORY_NAME,
    ) -> None:
        self.settings = settings or Settings.from_env()
        configure_logging(self.settings.log_level)
        self.registry = RepositoryRegistry(
            default_branch=self.settings.default_branch,
            author=self.settings.author,
        )
        if initial_repository is not None:
            self.registry.create(initial_repository)
        logger.debug("GitGraph started with %d repository(ies)", len(self.registry))

    def close(self) -> None:
        """Drop every registered listener."""
        self.registry.close()

    def __enter__(self) -> GitGraph:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # -- Active repository ----------------------------------------------------

    @property
    def repo(self) -> Repository:
        """The active repository.

        Raises :class:`InvalidStateError` if the registry is empty.
        """
        repo = self.registry.get_active()
        if repo is None:
            raise InvalidStateError("no active repository")
        return repo

    def commit(self, message: str, files: Mapping[str, str] | None = None) -> str:
        return self.repo.commit(message, files)

    def branch(self, name: str) -> None:
        self.repo.branch(name)

    def checkout(self, name: str) -> None:
        self.repo.checkout(name)

    def merge(self, name: str) -> str | None:
        return self.repo.merge(name)

    def history(self, max_count: int | None = None) -> list[LogEntry]:
        return get_history(self.repo, max_count)

    def commits(self) -> list[Commit]:
        return self.repo.commits()

    def branches(self) -> list[BranchInfo]:
        return self.repo.list_branches()

    def layout(self) -> GraphLayout:
        """Lay out the active repository with the configured geometry."""
        return layout_repository(self.repo, self.settings)

    # -- Repository management ------------------------------------------------

    def create_repository(self, name: str) -> str:
        return self.registry.create(name)

    def switch_repository(self, repo_id: str) -> None:
        self.registry.switch_to(repo_id)

    def delete_repository(self, repo_id: str) -> None:
        self.registry.delete(repo_id)

    def list_repositories(self) -> dict[str, str]:
        """Return repository id -> name in creation order."""
        return {repo_id: repo.name for repo_id, repo in self.registry.list_all().items()}

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Listen for registry changes (create, switch, delete)."""
        return self.registry.subscribe(callback)
