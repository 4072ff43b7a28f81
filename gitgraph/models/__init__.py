"""Data models for commits, branches, and repository snapshots."""

from gitgraph.models.commit import BranchInfo, Commit, RepositorySnapshot

__all__ = ["BranchInfo", "Commit", "RepositorySnapshot"]
