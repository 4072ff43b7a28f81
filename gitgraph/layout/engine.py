"""Layout engine — turn a commit DAG and branch map into a positioned diagram.

The layout is a pure function of its input.  Lanes follow branch-map order,
x follows creation sequence, and a commit shared by several branches is
drawn in the lane of the first branch whose first-parent walk reaches it.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from gitgraph.config import LANE_HEIGHT, UNKNOWN_LANE, X_SPACING, Settings
from gitgraph.layout.graph import GraphEdge, GraphLayout, GraphNode
from gitgraph.models.commit import Commit, RepositorySnapshot
from gitgraph.vcs.repo import Repository

logger = logging.getLogger(__name__)


def assign_lanes(branches: Mapping[str, str]) -> dict[str, int]:
    """Map each branch name to its row index, in branch-map order."""
    return {name: index for index, name in enumerate(branches)}


def claim_lanes(
    commits: Mapping[str, Commit],
    branches: Mapping[str, str],
) -> dict[str, str]:
    """Return commit id -> owning branch name.

    Each branch, in map order, walks its first-parent chain from the tip and
    stops at the first commit an earlier branch already claimed.  Second
    parents of merges are never followed.
    """
    owner: dict[str, str] = {}
    for name, tip in branches.items():
        current: str | None = tip
        while current is not None and current in commits and current not in owner:
            owner[current] = name
            current = commits[current].first_parent
    return owner


def collect_visible(
    commits: Mapping[str, Commit],
    branches: Mapping[str, str],
) -> set[str]:
    """Return every commit id reachable from any tip over all parents."""
    visited: set[str] = set()
    stack = [tip for tip in branches.values() if tip in commits]
    while stack:
        commit_id = stack.pop()
        if commit_id in visited:
            continue
        visited.add(commit_id)
        stack.extend(p for p in commits[commit_id].parents if p in commits)
    return visited


def make_edge_id(parent_id: str, child_id: str, is_merge: bool) -> str:
    edge_id = f"e-{parent_id}-{child_id}"
    return f"{edge_id}-merge" if is_merge else edge_id


def compute_layout(
    commits: Iterable[Commit],
    branches: Mapping[str, str],
    head: str,
    *,
    lane_height: float = LANE_HEIGHT,
    x_spacing: float = X_SPACING,
) -> GraphLayout:
    """Lay out a commit DAG.

    Parameters
    ----------
    commits:
        Commits to draw.  Only those reachable from a tip in *branches*
        appear in the result.
    branches:
        Branch name -> tip commit id.  Its iteration order decides lanes.
    head:
        Current branch name; its tip node is flagged ``is_head_tip``.
    lane_height:
        Vertical distance between lanes.
    x_spacing:
        Horizontal distance per sequence step.

    Returns
    -------
    GraphLayout
        Nodes sorted by sequence, and one edge per (parent, child) pair in
        parent-list order.  Empty input gives an empty layout.
    """
    by_id = {c.id: c for c in commits}
    lanes = assign_lanes(branches)
    owner = claim_lanes(by_id, branches)
    visible = collect_visible(by_id, branches)

    tips: dict[str, list[str]] = {}
    for name, tip in branches.items():
        tips.setdefault(tip, []).append(name)
    head_tip = branches.get(head)
    unknown_row = len(lanes)

    ordered = sorted((by_id[cid] for cid in visible), key=lambda c: (c.sequence, c.id))

    nodes: list[GraphNode] = []
    edges: list[GraphEdge] = []
    for commit in ordered:
        lane = owner.get(commit.id, UNKNOWN_LANE)
        row = lanes[lane] if lane in lanes else unknown_row
        if lane == UNKNOWN_LANE:
            logger.debug("Commit %s not claimed by any branch", commit.id)
        nodes.append(
            GraphNode(
                id=commit.id,
                lane=lane,
                x=commit.sequence * x_spacing,
                y=row * lane_height,
                is_head_tip=commit.id == head_tip,
                label=commit.message,
                branches=tuple(tips.get(commit.id, ())),
            )
        )
        for index, parent_id in enumerate(commit.parents):
            if parent_id not in visible:
                continue
            is_merge = index > 0
            edges.append(
                GraphEdge(
                    id=make_edge_id(parent_id, commit.id, is_merge),
                    parent_id=parent_id,
                    child_id=commit.id,
                    is_merge_edge=is_merge,
                )
            )

    logger.debug("Laid out %d nodes, %d edges, %d lanes", len(nodes), len(edges), len(lanes))
    return GraphLayout(nodes=nodes, edges=edges, lanes=lanes)


def layout_repository(
    source: Repository | RepositorySnapshot,
    settings: Settings | None = None,
) -> GraphLayout:
    """Lay out a repository, or a snapshot taken from one."""
    snapshot = source.snapshot() if isinstance(source, Repository) else source
    settings = settings or Settings()
    return compute_layout(
        snapshot.commits,
        snapshot.branches,
        snapshot.head,
        lane_height=settings.lane_height,
        x_spacing=settings.x_spacing,
    )
