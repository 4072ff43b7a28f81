"""In-memory version control — commit store, repositories, and registry."""

from gitgraph.vcs.errors import (
    GitGraphError,
    InvalidStateError,
    InvariantViolationError,
    NotFoundError,
)
from gitgraph.vcs.registry import RepositoryRegistry
from gitgraph.vcs.repo import Repository
from gitgraph.vcs.store import CommitStore

__all__ = [
    "CommitStore",
    "GitGraphError",
    "InvalidStateError",
    "InvariantViolationError",
    "NotFoundError",
    "Repository",
    "RepositoryRegistry",
]
