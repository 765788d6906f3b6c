from dataclasses import dataclass

from drainnet.domain.entities.geography import NodeId


@dataclass(frozen=True)
class MatchResult:
    node_id: NodeId
    distance_m: float
    path: tuple[NodeId, ...] = ()  # start .. node_id


@dataclass(frozen=True)
class FacilityDistance:
    nearest_target_id: str
    distance_meters: float


@dataclass(frozen=True)
class OutletDistance:
    """Per-facility lookup result; None fields mean no connected outlet."""

    facility_id: str
    nearest_outlet: str | None = None
    distance_to_outlet: float | None = None

    @property
    def found(self) -> bool:
        return self.nearest_outlet is not None
