"""Tests for the graph layout engine.

Covers lane assignment, first-parent lane ownership, traversal, positioning,
edge generation, determinism, and the serialised output shape.
"""

from __future__ import annotations

import json

import pytest

from gitgraph.config import Settings
from gitgraph.layout.engine import (
    assign_lanes,
    claim_lanes,
    collect_visible,
    compute_layout,
    layout_repository,
    make_edge_id,
)
from gitgraph.layout.graph import GraphLayout
from gitgraph.models.commit import Commit
from gitgraph.vcs.repo import Repository


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def merged() -> Repository:
    """main: c0 - c1 - c3 - c4(merge); feature: c1 - c2."""
    repo = Repository("demo")
    repo.commit("A", {})
    repo.branch("feature")
    repo.checkout("feature")
    repo.commit("B", {})
    repo.checkout("main")
    repo.commit("C", {})
    repo.merge("feature")
    return repo


def _commits(*entries: tuple[str, tuple[str, ...]]) -> list[Commit]:
    return [
        Commit(id=cid, message=cid, parents=parents, sequence=seq)
        for seq, (cid, parents) in enumerate(entries)
    ]


# ---------------------------------------------------------------------------
# Building blocks
# ---------------------------------------------------------------------------


class TestLaneAssignment:
    def test_follows_branch_order(self) -> None:
        assert assign_lanes({"main": "a", "feature": "b", "hotfix": "a"}) == {
            "main": 0, "feature": 1, "hotfix": 2,
        }

    def test_first_claim_wins(self) -> None:
        commits = {c.id: c for c in _commits(("r", ()), ("a", ("r",)), ("b", ("a",)))}
        owner = claim_lanes(commits, {"feature": "b", "main": "a"})
        assert owner == {"b": "feature", "a": "feature", "r": "feature"}

    def test_merge_parent_not_claimed_through(self) -> None:
        commits = {
            c.id: c
            for c in _commits(("r", ()), ("x", ("r",)), ("m", ("r", "x")))
        }
        assert claim_lanes(commits, {"main": "m"}) == {"m": "main", "r": "main"}

    def test_collect_visible_follows_all_parents(self) -> None:
        commits = {
            c.id: c
            for c in _commits(("r", ()), ("x", ("r",)), ("m", ("r", "x")), ("orphan", ()))
        }
        assert collect_visible(commits, {"main": "m"}) == {"r", "x", "m"}

    def test_edge_id_disambiguates_merge(self) -> None:
        assert make_edge_id("p", "c", False) == "e-p-c"
        assert make_edge_id("p", "c", True) == "e-p-c-merge"


# ---------------------------------------------------------------------------
# Full layout
# ---------------------------------------------------------------------------


class TestComputeLayout:
    def test_scenario(self, merged: Repository) -> None:
        layout = layout_repository(merged)
        assert layout.lanes == {"main": 0, "feature": 1}
        assert [n.id for n in layout.nodes] == [f"demo-c{i}" for i in range(5)]

        lanes = {n.id: n.lane for n in layout.nodes}
        assert lanes == {
            "demo-c0": "main",
            "demo-c1": "main",
            "demo-c2": "feature",
            "demo-c3": "main",
            "demo-c4": "main",
        }

        incoming = layout.edges_into("demo-c4")
        assert [(e.parent_id, e.is_merge_edge) for e in incoming] == [
            ("demo-c3", False),
            ("demo-c2", True),
        ]

    def test_positions(self, merged: Repository) -> None:
        layout = layout_repository(merged)
        coords = {n.id: (n.x, n.y) for n in layout.nodes}
        assert coords["demo-c0"] == (0, 0)
        assert coords["demo-c2"] == (400, 100)
        assert coords["demo-c4"] == (800, 0)

    def test_custom_geometry(self, merged: Repository) -> None:
        layout = layout_repository(merged, Settings(lane_height=50, x_spacing=10))
        c2 = layout.node("demo-c2")
        assert (c2.x, c2.y) == (20, 50)

    def test_head_tip_highlight(self, merged: Repository) -> None:
        layout = layout_repository(merged)
        assert [n.id for n in layout.nodes if n.is_head_tip] == ["demo-c4"]

        merged.checkout("feature")
        layout = layout_repository(merged)
        assert [n.id for n in layout.nodes if n.is_head_tip] == ["demo-c2"]

    def test_tip_branch_labels(self, merged: Repository) -> None:
        layout = layout_repository(merged)
        assert layout.node("demo-c4").branches == ("main",)
        assert layout.node("demo-c2").branches == ("feature",)
        assert layout.node("demo-c1").branches == ()
        assert layout.node("demo-c3").label == "C"

    def test_edges(self, merged: Repository) -> None:
        layout = layout_repository(merged)
        assert [e.id for e in layout.edges] == [
            "e-demo-c0-demo-c1",
            "e-demo-c1-demo-c2",
            "e-demo-c1-demo-c3",
            "e-demo-c3-demo-c4",
            "e-demo-c2-demo-c4-merge",
        ]

    def test_edges_reference_nodes(self, merged: Repository) -> None:
        layout = layout_repository(merged)
        ids = {n.id for n in layout.nodes}
        for edge in layout.edges:
            assert edge.parent_id in ids
            assert edge.child_id in ids

    def test_deterministic(self, merged: Repository) -> None:
        assert layout_repository(merged) == layout_repository(merged)
        assert layout_repository(merged).to_json() == layout_repository(merged).to_json()

    def test_input_order_does_not_matter(self, merged: Repository) -> None:
        snap = merged.snapshot()
        forward = compute_layout(snap.commits, snap.branches, snap.head)
        backward = compute_layout(reversed(snap.commits), snap.branches, snap.head)
        assert forward == backward

    def test_branch_order_decides_shared_lane(self) -> None:
        repo = Repository("r")
        repo.commit("A", {})
        repo.branch("feature")
        layout = layout_repository(repo)
        assert all(n.lane == "main" for n in layout.nodes)
        assert layout.node("r-c1").branches == ("main", "feature")

    def test_unknown_lane(self) -> None:
        commits = _commits(("r", ()), ("x", ("r",)), ("m", ("r", "x")))
        layout = compute_layout(commits, {"main": "m"}, "main")
        x = layout.node("x")
        assert x.lane == "unknown"
        assert x.y == 100
        assert [e.is_merge_edge for e in layout.edges_into("m")] == [False, True]

    def test_parent_outside_set_skipped(self) -> None:
        commits = _commits(("a", ("gone",)), ("b", ("a",)))
        layout = compute_layout(commits, {"main": "b"}, "main")
        assert [n.id for n in layout.nodes] == ["a", "b"]
        assert [e.id for e in layout.edges] == ["e-a-b"]

    def test_unreachable_commits_hidden(self) -> None:
        commits = _commits(("r", ()), ("a", ("r",)), ("stray", ("r",)))
        layout = compute_layout(commits, {"main": "a"}, "main")
        assert layout.node("stray") is None

    def test_empty(self) -> None:
        layout = compute_layout([], {}, "main")
        assert layout.is_empty
        assert layout.edges == []
        assert layout.lanes == {}

    def test_branch_tip_missing_from_commits(self) -> None:
        layout = compute_layout([], {"main": "nope"}, "main")
        assert layout.nodes == []
        assert layout.lanes == {"main": 0}

    def test_layout_from_snapshot(self, merged: Repository) -> None:
        snap = merged.snapshot()
        merged.commit("after snapshot", {})
        assert len(layout_repository(snap).nodes) == 5
        assert len(layout_repository(merged).nodes) == 6


class TestSerialisation:
    def test_node_and_edge_keys(self, merged: Repository) -> None:
        data = layout_repository(merged).to_dict()
        node = data["nodes"][0]
        edge = data["edges"][0]
        assert {"id", "lane", "x", "y", "isHeadTip"} <= set(node)
        assert set(edge) == {"id", "parentId", "childId", "isMergeEdge"}

    def test_to_json_round_trips(self, merged: Repository) -> None:
        layout = layout_repository(merged)
        data = json.loads(layout.to_json())
        assert data["lanes"] == {"main": 0, "feature": 1}
        assert data["edges"][-1] == {
            "id": "e-demo-c2-demo-c4-merge",
            "parentId": "demo-c2",
            "childId": "demo-c4",
            "isMergeEdge": True,
        }

    def test_empty_layout_dict(self) -> None:
        assert GraphLayout().to_dict() == {"lanes": {}, "nodes": [], "edges": []}
