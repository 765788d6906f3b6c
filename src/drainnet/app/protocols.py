from collections.abc import Hashable
from typing import Protocol, runtime_checkable

from drainnet.domain.entities.geography import Coordinate


# ------------- Mechanics --------------------
@runtime_checkable
class NodeKeyFn(Protocol):
    """
    Maps a polyline vertex to the key used to merge vertices into graph nodes.
    Two vertices with equal keys become the same node.
    """

    def __call__(self, c: Coordinate) -> Hashable: ...
