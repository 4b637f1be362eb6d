"""
Geographic Primitives
=====================
Coordinates, displayed map regions and the Web-Mercator projection used by the
map view.

The map is drawn in projected metres (EPSG:3857). At latitude ``phi`` one
ground metre spans ``1 / cos(phi)`` projected metres, in both directions, so a
region given in ground metres converts to a projected rectangle by a single
scale factor.
"""
from __future__ import annotations

from dataclasses import dataclass
import math
from typing import TYPE_CHECKING, Tuple

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt

EARTH_RADIUS_M: float = 6_378_137.0
METERS_PER_DEGREE: float = 111_320.0

# Web-Mercator is undefined at the poles.
MAX_MERCATOR_LATITUDE: float = 85.05112878


@dataclass(frozen=True)
class Coordinate:
    """A WGS84 point in degrees."""
    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"Latitude {self.latitude} out of range [-90, 90].")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"Longitude {self.longitude} out of range [-180, 180].")


@dataclass(frozen=True)
class MapRegion:
    """
    A displayed map area: a center and the ground distance covered north-south
    and east-west.
    """
    center: Coordinate
    latitudinal_meters: float
    longitudinal_meters: float

    @classmethod
    def around(cls, center: Coordinate, meters: float) -> MapRegion:
        """Square region of ``meters`` on each side centred on ``center``."""
        return cls(center=center, latitudinal_meters=meters, longitudinal_meters=meters)

    def lat_span_degrees(self) -> float:
        return self.latitudinal_meters / METERS_PER_DEGREE

    def lon_span_degrees(self) -> float:
        cos_lat = math.cos(math.radians(self.center.latitude))
        if cos_lat < 1e-9:
            return 360.0
        return min(360.0, self.longitudinal_meters / (METERS_PER_DEGREE * cos_lat))

    def projected_bounds(self) -> Tuple[float, float, float, float]:
        """(x_min, x_max, y_min, y_max) of the region in projected metres."""
        cx, cy = project(self.center.latitude, self.center.longitude)
        scale = mercator_scale(self.center.latitude)
        half_w = 0.5 * self.longitudinal_meters * scale
        half_h = 0.5 * self.latitudinal_meters * scale
        return float(cx - half_w), float(cx + half_w), float(cy - half_h), float(cy + half_h)


def mercator_scale(latitude: float) -> float:
    """Projected metres per ground metre at the given latitude."""
    lat = min(abs(latitude), MAX_MERCATOR_LATITUDE)
    return 1.0 / math.cos(math.radians(lat))


def project(latitude: float | npt.ArrayLike, longitude: float | npt.ArrayLike) -> tuple[np.ndarray, np.ndarray]:
    """WGS84 degrees -> Web-Mercator metres. Accepts scalars or arrays."""
    lat = np.clip(np.asarray(latitude, dtype=float), -MAX_MERCATOR_LATITUDE, MAX_MERCATOR_LATITUDE)
    lon = np.asarray(longitude, dtype=float)
    x = EARTH_RADIUS_M * np.radians(lon)
    y = EARTH_RADIUS_M * np.log(np.tan(np.pi / 4.0 + np.radians(lat) / 2.0))
    return x, y


def unproject(x: float | npt.ArrayLike, y: float | npt.ArrayLike) -> tuple[np.ndarray, np.ndarray]:
    """Web-Mercator metres -> WGS84 degrees (latitude, longitude)."""
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    lon = np.degrees(x / EARTH_RADIUS_M)
    lat = np.degrees(2.0 * np.arctan(np.exp(y / EARTH_RADIUS_M)) - np.pi / 2.0)
    # wrap the antimeridian so the result stays a valid Coordinate
    lon = (lon + 180.0) % 360.0 - 180.0
    return lat, lon


def coordinate_from_projected(x: float, y: float) -> Coordinate:
    """Projected metres -> Coordinate, clamped to the latitudes the projection can draw."""
    lat, lon = unproject(x, y)
    lat = float(np.clip(lat, -MAX_MERCATOR_LATITUDE, MAX_MERCATOR_LATITUDE))
    return Coordinate(latitude=lat, longitude=float(lon))
