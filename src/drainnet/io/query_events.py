# drainnet/io/query_events.py

from dataclasses import dataclass
from typing import Literal


# Base type for analytics records (emitted once per graph build / query)
@dataclass
class QueryRecord:
    run_id: str
    seq: int  # engine query sequence (for total ordering)
    name: str  # stable record name


@dataclass
class GraphBuiltRecord(QueryRecord):
    nodes: int
    edges: int
    skipped: int


@dataclass
class DistanceResolvedRecord(QueryRecord):
    source: tuple[float, float]
    nearest_target_id: str
    distance_m: float
    facility_id: str | None = None


@dataclass
class DistanceUnresolvedRecord(QueryRecord):
    source: tuple[float, float] | None
    reason: Literal[
        "empty_graph", "unsnappable", "no_targets", "unreachable", "unknown_facility"
    ]
    facility_id: str | None = None
