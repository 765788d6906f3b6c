# tests/domain/test_search.py
import pytest

from drainnet.domain.entities.geography import Coordinate, GraphEdge, GraphNode, NetworkGraph
from drainnet.domain.mechanics.mechanics_geodesy import haversine_m
from drainnet.domain.mechanics.mechanics_graph_builder import build_graph
from drainnet.domain.mechanics.mechanics_search import shortest_distance_to_any
from drainnet.engine.hooks import NoopHooks


def _hand_graph(edges: list[tuple[str, str, float]]) -> NetworkGraph:
    ids = sorted({n for u, v, _ in edges for n in (u, v)})
    nodes = {nid: GraphNode(nid, Coordinate(float(i), 0.0)) for i, nid in enumerate(ids)}
    adj: dict[str, list[GraphEdge]] = {nid: [] for nid in ids}
    for u, v, w in edges:
        adj[u].append(GraphEdge(u, v, w))
        adj[v].append(GraphEdge(v, u, w))
    return NetworkGraph(nodes, adj)


def test_chain_distance_is_sum_of_segments():
    a, b, c = (0.0, 0.0), (0.0, 0.001), (0.0, 0.002)
    g = build_graph([[a, b, c]])
    hit = shortest_distance_to_any(g, "node_0", {"node_2"})
    assert hit.node_id == "node_2"
    assert hit.distance_m == pytest.approx(haversine_m(a, b) + haversine_m(b, c))
    assert hit.distance_m == pytest.approx(2 * 111.195, abs=0.05)
    assert hit.path == ("node_0", "node_1", "node_2")


def test_bent_pipe_distance_exceeds_straight_line():
    a, b, c = (0.0, 0.0), (0.001, 0.0), (0.001, 0.001)
    g = build_graph([[a, b, c]])
    hit = shortest_distance_to_any(g, "node_0", {"node_2"})
    assert hit.distance_m == pytest.approx(haversine_m(a, b) + haversine_m(b, c))
    assert hit.distance_m > haversine_m(a, c) + 1.0


def test_start_in_targets_is_zero_distance():
    g = build_graph([[(0.0, 0.0), (0.0, 0.001)]])
    hit = shortest_distance_to_any(g, "node_1", {"node_0", "node_1"})
    assert hit.node_id == "node_1"
    assert hit.distance_m == 0.0
    assert hit.path == ("node_1",)


def test_empty_targets_and_unknown_start_give_none():
    g = build_graph([[(0.0, 0.0), (0.0, 0.001)]])
    assert shortest_distance_to_any(g, "node_0", set()) is None
    assert shortest_distance_to_any(g, "node_42", {"node_0"}) is None
    assert shortest_distance_to_any(build_graph([]), "node_0", {"node_0"}) is None


def test_disjoint_components_are_unreachable():
    g = build_graph([[(0.0, 0.0), (0.0, 0.001)], [(1.0, 1.0), (1.0, 1.001)]])
    assert shortest_distance_to_any(g, "node_0", {"node_2", "node_3"}) is None


def test_first_target_reached_is_the_nearest():
    center = (0.0, 0.0)
    arms = [(0.0, 0.003), (0.001, 0.0), (0.0, -0.002)]
    g = build_graph([[center, end] for end in arms])
    targets = {"node_1", "node_2", "node_3"}

    hit = shortest_distance_to_any(g, "node_0", targets)
    assert hit.node_id == "node_2"
    for t in targets:
        alone = shortest_distance_to_any(g, "node_0", {t})
        assert hit.distance_m <= alone.distance_m


def test_relaxation_prefers_cheaper_detour():
    g = _hand_graph([("A", "B", 10.0), ("A", "C", 1.0), ("C", "B", 2.0), ("B", "T", 1.0)])
    hit = shortest_distance_to_any(g, "A", {"T"})
    assert hit.distance_m == pytest.approx(4.0)
    assert hit.path == ("A", "C", "B", "T")


def test_zero_weight_edges_are_traversed():
    g = _hand_graph([("A", "B", 0.0), ("B", "C", 0.0)])
    hit = shortest_distance_to_any(g, "A", {"C"})
    assert hit.node_id == "C" and hit.distance_m == 0.0


def test_reachability_is_symmetric():
    pipes = [
        [(0.0, 0.0), (0.0, 0.001), (0.0005, 0.0015)],
        [(0.0005, 0.0015), (0.001, 0.002), (0.002, 0.002)],
    ]
    g = build_graph(pipes)
    last = g.node_ids[-1]
    there = shortest_distance_to_any(g, "node_0", {last})
    back = shortest_distance_to_any(g, last, {"node_0"})
    assert there.distance_m == pytest.approx(back.distance_m)
    assert there.path == tuple(reversed(back.path))


class SearchHooks(NoopHooks):
    def __init__(self):
        self.calls = []

    def search_end(self, **kw):
        self.calls.append(kw)


def test_search_reports_settled_nodes():
    hooks = SearchHooks()
    g = _hand_graph([("A", "B", 1.0), ("B", "C", 1.0)])
    split = _hand_graph([("A", "B", 1.0), ("X", "Y", 1.0)])
    shortest_distance_to_any(g, "A", {"C"}, hooks=hooks)
    shortest_distance_to_any(split, "A", {"Y"}, hooks=hooks)
    found, missed = hooks.calls
    assert found["reached"] == "C" and found["settled"] == 3
    assert missed["reached"] is None and missed["distance_m"] is None
