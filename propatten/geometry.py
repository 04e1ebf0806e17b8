"""Geodetic positions, ECEF conversion and link elevation angles on WGS-84."""

from __future__ import annotations

import math
from dataclasses import dataclass

_SEMI_MAJOR_AXIS = 6378137.0
_FLATTENING = 1.0 / 298.257223563
_ECC_SQUARED = 2 * _FLATTENING - _FLATTENING * _FLATTENING


class ParameterError(ValueError):
    """Raised when an input lies outside the range a model accepts."""


@dataclass(frozen=True)
class Position:
    """Geodetic position: latitude and longitude in degrees, altitude in metres."""

    lat: float
    lon: float
    alt: float = 0.0


@dataclass(frozen=True)
class Location:
    """Earth-centred, Earth-fixed cartesian coordinates in metres."""

    x: float
    y: float
    z: float


def blh_to_xyz(position: Position) -> Location:
    """Convert a geodetic position to ECEF coordinates."""
    lat = math.radians(position.lat)
    lon = math.radians(position.lon)
    alt = position.alt
    sin_lat = math.sin(lat)
    n = _SEMI_MAJOR_AXIS / math.sqrt(1 - _ECC_SQUARED * sin_lat * sin_lat)
    return Location(
        x=(n + alt) * math.cos(lat) * math.cos(lon),
        y=(n + alt) * math.cos(lat) * math.sin(lon),
        z=((1 - _ECC_SQUARED) * n + alt) * sin_lat,
    )


def elevation_angle(satellite: Location, station_xyz: Location, station: Position) -> float:
    """Elevation in degrees of ``satellite`` seen from the station.

    Raises ParameterError if the two points coincide.
    """
    dx = satellite.x - station_xyz.x
    dy = satellite.y - station_xyz.y
    dz = satellite.z - station_xyz.z
    norm = math.sqrt(dx * dx + dy * dy + dz * dz)
    if norm == 0:
        raise ParameterError("satellite and station positions coincide")
    ux, uy, uz = dx / norm, dy / norm, dz / norm

    lat = math.radians(station.lat)
    lon = math.radians(station.lon)
    sin_lat, cos_lat = math.sin(lat), math.cos(lat)
    sin_lon, cos_lon = math.sin(lon), math.cos(lon)

    east = -sin_lon * ux + cos_lon * uy
    north = -cos_lon * sin_lat * ux - sin_lon * sin_lat * uy + cos_lat * uz
    up = cos_lon * cos_lat * ux + sin_lon * cos_lat * uy + sin_lat * uz
    return math.degrees(math.atan2(up, math.hypot(east, north)))


def link_elevation(satellite: Position, station: Position) -> float:
    """Elevation in degrees of a satellite position seen from a station position."""
    return elevation_angle(blh_to_xyz(satellite), blh_to_xyz(station), station)