import time
from collections.abc import Hashable, Iterable

from drainnet.app.protocols import NodeKeyFn
from drainnet.domain.entities.geography import (
    Coordinate,
    GraphEdge,
    GraphNode,
    NetworkGraph,
    NodeId,
    Polyline,
)
from drainnet.domain.mechanics.mechanics_geodesy import EARTH_RADIUS_M, haversine_m
from drainnet.engine.hooks import EngineHooks, NoopHooks


# -------- Node merge keys


def exact_key(c: Coordinate) -> Hashable:
    return (c.lon, c.lat)


class RoundedKey(NodeKeyFn):
    """Merge vertices equal after rounding to `decimals` degrees (7 ~ 1 cm)."""

    def __init__(self, decimals: int = 7):
        self.decimals = decimals

    def __call__(self, c: Coordinate) -> Hashable:
        return (round(c.lon, self.decimals), round(c.lat, self.decimals))

    def __repr__(self):
        return f"RoundedKey(decimals={self.decimals})"


# -------- Builder


def build_graph(
    polylines: Iterable[Polyline],
    *,
    node_key: NodeKeyFn = exact_key,
    radius_m: float = EARTH_RADIUS_M,
    hooks: EngineHooks | None = None,
) -> NetworkGraph:
    """
    Walk consecutive vertex pairs of every polyline, merging vertices with
    equal keys into one node and adding one edge per direction per segment.
    Polylines with fewer than two vertices are skipped.
    """
    hooks = hooks or NoopHooks()
    t0 = time.perf_counter()

    nodes: dict[NodeId, GraphNode] = {}
    adj: dict[NodeId, list[GraphEdge]] = {}
    key_to_id: dict[Hashable, NodeId] = {}
    skipped = 0
    edges = 0

    def node_id_for(c: Coordinate) -> NodeId:
        k = node_key(c)
        nid = key_to_id.get(k)
        if nid is None:
            nid = f"node_{len(key_to_id)}"
            key_to_id[k] = nid
            nodes[nid] = GraphNode(nid, c)
            adj[nid] = []
        return nid

    for line in polylines:
        pts = [Coordinate.of(p) for p in line]
        if len(pts) < 2:
            skipped += 1
            continue
        for a, b in zip(pts, pts[1:]):
            u, v = node_id_for(a), node_id_for(b)
            w = haversine_m(a, b, radius_m=radius_m)
            adj[u].append(GraphEdge(u, v, w))
            adj[v].append(GraphEdge(v, u, w))
            edges += 2

    graph = NetworkGraph(nodes, adj, skipped=skipped)
    hooks.graph_built(
        nodes=len(nodes),
        edges=edges,
        skipped=skipped,
        ms=(time.perf_counter() - t0) * 1000,
    )
    return graph
