from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from types import MappingProxyType

import numpy as np

NodeId = str


# Core geometry types used by mechanics
@dataclass(frozen=True)
class Coordinate:
    lon: float  # decimal degrees, WGS84
    lat: float

    @classmethod
    def of(cls, value: "Coordinate | Sequence[float]") -> "Coordinate":
        if isinstance(value, Coordinate):
            return value
        lon, lat = value[0], value[1]  # GeoJSON positions may carry a z
        return cls(float(lon), float(lat))

    def as_tuple(self) -> tuple[float, float]:
        return (self.lon, self.lat)


Polyline = Sequence[Coordinate | tuple[float, float]]


class FacilityKind(Enum):
    INLET = "inlet"
    OUTLET = "outlet"
    STORM_DRAIN = "storm_drain"


@dataclass(frozen=True)
class Facility:
    id: str
    coordinate: Coordinate
    kind: FacilityKind | None = None

    def __post_init__(self):
        # accept (lon, lat) tuples from callers
        object.__setattr__(self, "coordinate", Coordinate.of(self.coordinate))


@dataclass(frozen=True)
class GraphNode:
    id: NodeId
    coordinate: Coordinate


@dataclass(frozen=True)
class GraphEdge:
    from_id: NodeId
    to_id: NodeId
    weight: float  # meters


class NetworkGraph:
    """
    Undirected pipe network stored as a directed adjacency list
    (one edge per direction). Read-only once constructed.
    """

    def __init__(
        self,
        nodes: Mapping[NodeId, GraphNode] | None = None,
        adjacency: Mapping[NodeId, Iterable[GraphEdge]] | None = None,
        *,
        skipped: int = 0,  # polylines dropped by the builder
    ):
        self.skipped = skipped
        nodes = dict(nodes or {})
        adj = {nid: tuple(adjacency.get(nid, ())) if adjacency else () for nid in nodes}
        self._nodes = MappingProxyType(nodes)
        self._adj = MappingProxyType(adj)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    @property
    def nodes(self) -> Mapping[NodeId, GraphNode]:
        return self._nodes

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        """Directed edge count (two per pipe segment)."""
        return sum(len(edges) for edges in self._adj.values())

    def is_empty(self) -> bool:
        return not self._nodes

    def node_point(self, node_id: NodeId) -> Coordinate:
        return self._nodes[node_id].coordinate

    def neighbors(self, node_id: NodeId) -> tuple[GraphEdge, ...]:
        return self._adj.get(node_id, ())

    def iter_edges(self) -> Iterator[GraphEdge]:
        for edges in self._adj.values():
            yield from edges

    # ---- snapping support (node order == insertion order)

    @cached_property
    def node_ids(self) -> tuple[NodeId, ...]:
        return tuple(self._nodes)

    @cached_property
    def lonlat(self) -> np.ndarray:
        """(V, 2) float array of node coordinates, row i <-> node_ids[i]."""
        if not self._nodes:
            arr = np.empty((0, 2), dtype=float)
            arr.flags.writeable = False
            return arr
        arr = np.array([n.coordinate.as_tuple() for n in self._nodes.values()], dtype=float)
        arr.flags.writeable = False
        return arr
