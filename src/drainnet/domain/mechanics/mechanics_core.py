# drainnet/domain/mechanics/mechanics_core.py
import itertools
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from drainnet.app.protocols import NodeKeyFn
from drainnet.domain.entities.geography import Coordinate, Facility, NetworkGraph, NodeId, Polyline
from drainnet.domain.entities.results import FacilityDistance, MatchResult, OutletDistance
from drainnet.domain.mechanics.mechanics_geodesy import EARTH_RADIUS_M
from drainnet.domain.mechanics.mechanics_graph_builder import build_graph, exact_key
from drainnet.domain.mechanics.mechanics_search import shortest_distance_to_any
from drainnet.domain.mechanics.mechanics_snapping import nearest_node
from drainnet.engine.hooks import EngineHooks, NoopHooks
from drainnet.io.query_events import (
    DistanceResolvedRecord,
    DistanceUnresolvedRecord,
    GraphBuiltRecord,
)
from drainnet.runtime.resources import GraphCache

Network = NetworkGraph | Iterable[Polyline]
Targets = Iterable[Facility] | Iterable[tuple[str, Coordinate | Sequence[float]]] | Mapping


def _as_facilities(target_points: Targets) -> list[Facility]:
    if isinstance(target_points, Mapping):
        target_points = target_points.items()
    out = []
    for t in target_points:
        out.append(t if isinstance(t, Facility) else Facility(t[0], Coordinate.of(t[1])))
    return out


@dataclass
class NetworkEngine:
    """
    Façade bundling graph construction, snapping and the nearest-target search.
    Graphs are cached by polyline fingerprint unless cache_maxsize is None.
    """

    node_key: NodeKeyFn = exact_key
    radius_m: float = EARTH_RADIUS_M
    hooks: EngineHooks = field(default_factory=NoopHooks)
    run_id: str = "local"
    cache_maxsize: int | None = 8

    def __post_init__(self):
        self._seq = itertools.count(1)
        self._cache = (
            GraphCache(self.build_graph, maxsize=self.cache_maxsize) if self.cache_maxsize else None
        )

    # ---- building blocks

    def build_graph(self, polylines: Iterable[Polyline]) -> NetworkGraph:
        g = build_graph(polylines, node_key=self.node_key, radius_m=self.radius_m, hooks=self.hooks)
        self.hooks.record(
            GraphBuiltRecord(
                self.run_id, next(self._seq), "GraphBuilt", g.node_count, g.edge_count, g.skipped
            )
        )
        return g

    def graph(self, network: Network) -> NetworkGraph:
        if isinstance(network, NetworkGraph):
            return network
        if self._cache is None:
            return self.build_graph(network)
        return self._cache.get(network)

    def clear_cache(self) -> None:
        if self._cache is not None:
            self._cache.clear()

    def nearest_node(self, graph: NetworkGraph, point) -> NodeId | None:
        return nearest_node(graph, point, radius_m=self.radius_m)

    def shortest_distance_to_any(
        self, graph: NetworkGraph, start: NodeId, targets
    ) -> MatchResult | None:
        return shortest_distance_to_any(graph, start, targets, hooks=self.hooks)

    # ---- composed operations

    def nearest_facility_distance(
        self, polylines: Network, source_point, target_points: Targets
    ) -> FacilityDistance | None:
        return self._query(polylines, Coordinate.of(source_point), target_points)

    def distance_to_outlet(
        self,
        facility_id: str,
        facilities: Iterable[Facility],
        outlets: Targets,
        pipes: Network,
    ) -> OutletDistance:
        """Network distance from one inlet/storm drain (looked up by id) to its nearest outlet."""
        fac = next((f for f in facilities if f.id == facility_id), None)
        if fac is None:
            self._unresolved(next(self._seq), None, "unknown_facility", facility_id)
            return OutletDistance(facility_id)
        hit = self._query(pipes, fac.coordinate, outlets, facility_id=facility_id)
        if hit is None:
            return OutletDistance(facility_id)
        return OutletDistance(facility_id, hit.nearest_target_id, hit.distance_meters)

    # ---- internals

    def _query(
        self, polylines: Network, src: Coordinate, target_points: Targets, *, facility_id=None
    ) -> FacilityDistance | None:
        graph = self.graph(polylines)
        seq = next(self._seq)

        start = self.nearest_node(graph, src)
        if start is None:
            reason = "empty_graph" if graph.is_empty() else "unsnappable"
            return self._unresolved(seq, src, reason, facility_id)
        self.hooks.snap(point=src.as_tuple(), node_id=start, role="source")

        # later facilities win when two snap to the same node
        by_node: dict[NodeId, str] = {}
        for fac in _as_facilities(target_points):
            nid = self.nearest_node(graph, fac.coordinate)
            if nid is None:
                continue
            self.hooks.snap(point=fac.coordinate.as_tuple(), node_id=nid, role="target")
            by_node[nid] = fac.id
        if not by_node:
            return self._unresolved(seq, src, "no_targets", facility_id)

        hit = self.shortest_distance_to_any(graph, start, by_node.keys())
        if hit is None:
            return self._unresolved(seq, src, "unreachable", facility_id)

        out = FacilityDistance(by_node[hit.node_id], hit.distance_m)
        self.hooks.record(
            DistanceResolvedRecord(
                self.run_id,
                seq,
                "DistanceResolved",
                src.as_tuple(),
                out.nearest_target_id,
                out.distance_meters,
                facility_id,
            )
        )
        self.hooks.query_end(
            outcome="resolved",
            seq=seq,
            facility_id=facility_id,
            nearest_target_id=out.nearest_target_id,
            distance_m=out.distance_meters,
            hops=len(hit.path) - 1,
        )
        return out

    def _unresolved(self, seq: int, src: Coordinate | None, reason: str, facility_id=None):
        source = src.as_tuple() if src else None
        self.hooks.record(
            DistanceUnresolvedRecord(
                self.run_id, seq, "DistanceUnresolved", source, reason, facility_id
            )
        )
        self.hooks.query_end(outcome=reason, seq=seq, facility_id=facility_id)
        return None


def nearest_facility_distance(
    polylines: Network,
    source_point,
    target_points: Targets,
    *,
    node_key: NodeKeyFn = exact_key,
    radius_m: float = EARTH_RADIUS_M,
) -> FacilityDistance | None:
    """One-shot query without caching or logging."""
    engine = NetworkEngine(node_key=node_key, radius_m=radius_m, cache_maxsize=None)
    return engine.nearest_facility_distance(polylines, source_point, target_points)
