"""gitgraph — in-memory version control with commit-graph layout."""

__version__ = "1.0.0"

from gitgraph.api.facade import GitGraph
from gitgraph.config import Settings, configure_logging
from gitgraph.layout.engine import compute_layout, layout_repository
from gitgraph.layout.graph import GraphEdge, GraphLayout, GraphNode
from gitgraph.models.commit import BranchInfo, Commit, RepositorySnapshot
from gitgraph.vcs.errors import (
    GitGraphError,
    InvalidStateError,
    InvariantViolationError,
    NotFoundError,
)
from gitgraph.vcs.history import LogEntry, get_branch_history, get_history
from gitgraph.vcs.registry import RepositoryRegistry
from gitgraph.vcs.repo import Repository
from gitgraph.vcs.store import CommitStore

__all__ = [
    "__version__",
    # Facade
    "GitGraph",
    "Settings",
    "configure_logging",
    # Version control
    "BranchInfo",
    "Commit",
    "CommitStore",
    "LogEntry",
    "Repository",
    "RepositoryRegistry",
    "RepositorySnapshot",
    "get_branch_history",
    "get_history",
    # Errors
    "GitGraphError",
    "InvalidStateError",
    "InvariantViolationError",
    "NotFoundError",
    # Layout
    "GraphEdge",
    "GraphLayout",
    "GraphNode",
    "compute_layout",
    "layout_repository",
]
