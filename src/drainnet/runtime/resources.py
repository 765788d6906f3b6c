# runtime/resources.py
from collections.abc import Callable, Iterable
from functools import lru_cache

from drainnet.domain.entities.geography import Coordinate, NetworkGraph, Polyline

PolylineKey = tuple[tuple[tuple[float, float], ...], ...]


def polyline_key(polylines: Iterable[Polyline]) -> PolylineKey:
    """Hashable fingerprint of a polyline set (order-sensitive)."""
    return tuple(tuple(Coordinate.of(p).as_tuple() for p in line) for line in polylines)


class GraphCache:
    """
    LRU of built graphs keyed by polyline fingerprint. A graph enters the
    cache only after it is fully built; a changed polyline set is a new key.
    """

    def __init__(self, builder: Callable[[PolylineKey], NetworkGraph], maxsize: int = 8):
        self._build = lru_cache(maxsize=maxsize)(builder)

    def get(self, polylines: Iterable[Polyline]) -> NetworkGraph:
        return self._build(polyline_key(polylines))

    def clear(self) -> None:
        self._build.cache_clear()

    def info(self):
        return self._build.cache_info()
