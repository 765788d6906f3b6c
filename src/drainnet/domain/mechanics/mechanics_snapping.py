import numpy as np

from drainnet.domain.entities.geography import Coordinate, NetworkGraph, NodeId
from drainnet.domain.mechanics.mechanics_geodesy import EARTH_RADIUS_M, haversine_many_m


def nearest_node_with_distance(
    graph: NetworkGraph, point, *, radius_m: float = EARTH_RADIUS_M
) -> tuple[NodeId, float] | None:
    """
    Linear scan over all nodes; ties go to the earliest-created node.
    Non-finite distances (NaN vertices or query point) never win.
    """
    if graph.is_empty():
        return None
    d = haversine_many_m(Coordinate.of(point), graph.lonlat, radius_m=radius_m)
    if np.isnan(d).all():
        return None
    i = int(np.nanargmin(d))
    return graph.node_ids[i], float(d[i])


def nearest_node(graph: NetworkGraph, point, *, radius_m: float = EARTH_RADIUS_M) -> NodeId | None:
    hit = nearest_node_with_distance(graph, point, radius_m=radius_m)
    return None if hit is None else hit[0]
