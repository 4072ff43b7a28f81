"""Layout output records — positioned nodes and routed edges for rendering.

The dictionary shape produced by :meth:`GraphLayout.to_dict` is what
renderers consume; its keys must stay stable.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class GraphNode:
    """A commit placed on the diagram."""

    id: str
    lane: str
    x: float
    y: float
    is_head_tip: bool = False
    label: str = ""
    branches: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "lane": self.lane,
            "x": self.x,
            "y": self.y,
            "isHeadTip": self.is_head_tip,
            "label": self.label,
            "branches": list(self.branches),
        }


@dataclass(frozen=True)
class GraphEdge:
    """A parent -> child link.  Merge edges come from second and later parents."""

    id: str
    parent_id: str
    child_id: str
    is_merge_edge: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "parentId": self.parent_id,
            "childId": self.child_id,
            "isMergeEdge": self.is_merge_edge,
        }


@dataclass
class GraphLayout:
    """Complete diagram for one repository state."""

    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)
    lanes: dict[str, int] = field(default_factory=dict)

    def node(self, commit_id: str) -> GraphNode | None:
        for node in self.nodes:
            if node.id == commit_id:
                return node
        return None

    def edges_into(self, commit_id: str) -> list[GraphEdge]:
        return [e for e in self.edges if e.child_id == commit_id]

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def to_dict(self) -> dict[str, Any]:
        return {
            "lanes": dict(self.lanes),
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)
