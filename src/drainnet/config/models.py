from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from drainnet.domain.entities.geography import Coordinate, Facility, FacilityKind
from drainnet.domain.mechanics.mechanics_geodesy import EARTH_RADIUS_M


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False
    sample_every: int = Field(default=1, ge=1)


# ----------------- NODE MERGE ---------------------


class NodeMergeExactModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["exact"] = "exact"


class NodeMergeRoundedModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["rounded"] = "rounded"
    decimals: int = Field(default=7, ge=0, le=12)


NodeMergeUnion = Annotated[
    NodeMergeExactModel | NodeMergeRoundedModel,
    Field(discriminator="kind"),
]


class GeodesyModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    earth_radius_m: float = Field(default=EARTH_RADIUS_M, gt=0)


class CacheModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    enabled: bool = True
    maxsize: int = Field(default=8, ge=1)


class EngineModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "drainnet"
    run_id: str = "local"
    log: LogModel = LogModel()
    node_merge: NodeMergeUnion = Field(default_factory=NodeMergeExactModel)
    geodesy: GeodesyModel = GeodesyModel()
    cache: CacheModel = CacheModel()


# ----------------- INPUT PAYLOADS ---------------------


def _check_lonlat(lon: float, lat: float) -> None:
    if not (-180.0 <= lon <= 180.0):
        raise ValueError(f"lon out of range [-180,180]: {lon}")
    if not (-90.0 <= lat <= 90.0):
        raise ValueError(f"lat out of range [-90,90]: {lat}")


class PipeModel(BaseModel):
    """Pipe centerline. Fewer than two points is allowed; the builder skips it."""

    model_config = ConfigDict(extra="ignore")
    id: str
    coordinates: list[tuple[float, float]] = Field(default_factory=list)  # (lon, lat)

    @field_validator("coordinates")
    @classmethod
    def _validate_coords(cls, coords: list[tuple[float, float]]):
        for lon, lat in coords:
            _check_lonlat(lon, lat)
        return coords

    def to_domain(self) -> list[Coordinate]:
        return [Coordinate(lon, lat) for lon, lat in self.coordinates]


class FacilityModel(BaseModel):
    model_config = ConfigDict(extra="ignore")
    id: str
    kind: FacilityKind | None = None
    coordinates: tuple[float, float]  # (lon, lat)

    @field_validator("coordinates")
    @classmethod
    def _validate_coords(cls, c: tuple[float, float]):
        _check_lonlat(*c)
        return c

    def to_domain(self) -> Facility:
        return Facility(self.id, Coordinate(*self.coordinates), self.kind)


class NetworkModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    pipes: list[PipeModel] = Field(default_factory=list)
    inlets: list[FacilityModel] = Field(default_factory=list)
    outlets: list[FacilityModel] = Field(default_factory=list)
    storm_drains: list[FacilityModel] = Field(default_factory=list)

    def polylines(self) -> list[list[Coordinate]]:
        return [p.to_domain() for p in self.pipes]

    def facilities(self, group: Literal["inlets", "outlets", "storm_drains"]) -> list[Facility]:
        default_kind = {
            "inlets": FacilityKind.INLET,
            "outlets": FacilityKind.OUTLET,
            "storm_drains": FacilityKind.STORM_DRAIN,
        }[group]
        out = []
        for f in getattr(self, group):
            fac = f.to_domain()
            out.append(fac if fac.kind else Facility(fac.id, fac.coordinate, default_kind))
        return out
