"""Graph layout — lanes, positions, and edges for drawing a commit DAG."""

from gitgraph.layout.engine import compute_layout, layout_repository
from gitgraph.layout.graph import GraphEdge, GraphLayout, GraphNode

__all__ = [
    "GraphEdge",
    "GraphLayout",
    "GraphNode",
    "compute_layout",
    "layout_repository",
]
