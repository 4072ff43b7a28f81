"""Commit — the immutable node of a repository's history DAG.

A commit never changes after creation: its identifier, parents and file map
are fixed.  File contents are opaque strings and are never interpreted.
"""

from __future__ import annotations

from datetime import datetime, timezone
from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from gitgraph.config import DEFAULT_AUTHOR


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Commit(BaseModel):
    """A snapshot record with parent links.

    ``parents`` is ordered: the first entry is the mainline parent, a second
    entry marks a merge.  ``sequence`` orders commits for layout only and is
    never used for identity.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    message: str
    parents: tuple[str, ...] = ()
    files: Mapping[str, str] = Field(default_factory=dict, validate_default=True)
    author: str = DEFAULT_AUTHOR
    timestamp: datetime = Field(default_factory=_utc_now)
    sequence: int = 0

    @field_validator("files", mode="after")
    @classmethod
    def freeze_files(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        """Copy the file map and expose it read-only."""
        return MappingProxyType(dict(value))

    @field_serializer("files")
    def dump_files(self, value: Mapping[str, str]) -> dict[str, str]:
        return dict(value)

    @property
    def is_root(self) -> bool:
        return len(self.parents) == 0

    @property
    def is_merge(self) -> bool:
        return len(self.parents) > 1

    @property
    def first_parent(self) -> str | None:
        return self.parents[0] if self.parents else None


class BranchInfo(BaseModel):
    """Branch information returned when listing branches."""

    name: str
    commit_id: str
    is_current: bool = False


class RepositorySnapshot(BaseModel):
    """Consistent view of a repository at one instant.

    ``branches`` keeps the repository's branch-map order, which the layout
    engine relies on for lane assignment.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    head: str
    branches: dict[str, str] = Field(default_factory=dict)
    commits: tuple[Commit, ...] = ()
