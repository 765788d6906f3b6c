# domain/mechanics/mechanics_geodesy.py
import math
from collections.abc import Sequence

import numpy as np

from drainnet.domain.entities.geography import Coordinate

# Mean Earth radius used by turf/GeoJSON tooling
EARTH_RADIUS_M = 6_371_008.8


def haversine_m(
    a: Coordinate | Sequence[float],
    b: Coordinate | Sequence[float],
    *,
    radius_m: float = EARTH_RADIUS_M,
) -> float:
    a, b = Coordinate.of(a), Coordinate.of(b)
    phi1 = math.radians(a.lat)
    phi2 = math.radians(b.lat)
    dphi = math.radians(b.lat - a.lat)
    dlmb = math.radians(b.lon - a.lon)

    s = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
    return 2 * radius_m * math.asin(math.sqrt(min(1.0, s)))


def haversine_many_m(
    p: Coordinate | Sequence[float], lonlat: np.ndarray, *, radius_m: float = EARTH_RADIUS_M
) -> np.ndarray:
    """Distances from p to every row of a (N, 2) lon/lat array."""
    p = Coordinate.of(p)
    if lonlat.size == 0:
        return np.empty(0, dtype=float)
    lon = np.radians(lonlat[:, 0])
    lat = np.radians(lonlat[:, 1])
    phi1 = math.radians(p.lat)
    dphi = lat - phi1
    dlmb = lon - math.radians(p.lon)

    s = np.sin(dphi / 2) ** 2 + math.cos(phi1) * np.cos(lat) * np.sin(dlmb / 2) ** 2
    return 2 * radius_m * np.arcsin(np.sqrt(np.clip(s, 0.0, 1.0)))


def polyline_length_m(points: Sequence, *, radius_m: float = EARTH_RADIUS_M) -> float:
    total = 0.0
    for i in range(1, len(points)):
        total += haversine_m(points[i - 1], points[i], radius_m=radius_m)
    return total
