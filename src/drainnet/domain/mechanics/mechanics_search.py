# domain/mechanics/mechanics_search.py
import heapq
import math
import time
from collections.abc import Collection

from drainnet.domain.entities.geography import NetworkGraph, NodeId
from drainnet.domain.entities.results import MatchResult
from drainnet.engine.hooks import EngineHooks, NoopHooks


def _walk_back(parent: dict[NodeId, NodeId], end: NodeId) -> tuple[NodeId, ...]:
    path = [end]
    while path[-1] in parent:
        path.append(parent[path[-1]])
    path.reverse()
    return tuple(path)


def shortest_distance_to_any(
    graph: NetworkGraph,
    start: NodeId,
    targets: Collection[NodeId],
    *,
    hooks: EngineHooks | None = None,
) -> MatchResult | None:
    """
    Dijkstra from `start` that stops at the first settled node in `targets`.
    Nodes settle in non-decreasing distance order, so that node is the
    nearest target. Returns None when no target is reachable.
    """
    hooks = hooks or NoopHooks()
    if not targets or start not in graph:
        return None

    t0 = time.perf_counter()
    dist: dict[NodeId, float] = {start: 0.0}
    parent: dict[NodeId, NodeId] = {}
    visited: set[NodeId] = set()
    seq = 0
    q: list[tuple[float, int, NodeId]] = [(0.0, seq, start)]
    result = None

    while q:
        d_u, _, u = heapq.heappop(q)
        if u in visited:
            continue  # stale entry
        visited.add(u)

        if u in targets:
            result = MatchResult(u, d_u, _walk_back(parent, u))
            break

        for e in graph.neighbors(u):
            v = e.to_id
            if v in visited:
                continue
            cand = d_u + e.weight
            if cand < dist.get(v, math.inf):
                dist[v] = cand
                parent[v] = u
                seq += 1
                heapq.heappush(q, (cand, seq, v))

    hooks.search_end(
        start=start,
        reached=result.node_id if result else None,
        distance_m=result.distance_m if result else None,
        settled=len(visited),
        ms=(time.perf_counter() - t0) * 1000,
    )
    return result
