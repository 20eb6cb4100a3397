"""Centralized geographic distance calculations.

This module provides Haversine distance calculations used by the GPS
distance reducer, the stationary-trip check and drop-off zone
classification.
"""

from math import atan2, cos, radians, sin, sqrt

EARTH_RADIUS_M = 6_371_000  # Earth radius in meters

Coordinate = tuple[float, float]  # (lat, lon)


def haversine_distance_m(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
) -> float:
    """Calculate the great-circle distance between two points in meters.

    Uses the Haversine formula to calculate the shortest distance over
    the Earth's surface between two points specified by latitude/longitude.

    Args:
        lat1: Latitude of first point in degrees
        lon1: Longitude of first point in degrees
        lat2: Latitude of second point in degrees
        lon2: Longitude of second point in degrees

    Returns:
        Distance between the two points in meters
    """
    lat1, lon1, lat2, lon2 = map(radians, [lat1, lon1, lat2, lon2])
    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    c = 2 * atan2(sqrt(a), sqrt(1 - a))

    return EARTH_RADIUS_M * c


def haversine_distance_km(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
) -> float:
    """Calculate the great-circle distance between two points in kilometers.

    Convenience wrapper around haversine_distance_m; fares, slabs and zone
    radii are all expressed in kilometers.
    """
    return haversine_distance_m(lat1, lon1, lat2, lon2) / 1000.0


def straight_line_km(start: Coordinate, end: Coordinate) -> float:
    """Straight-line distance in kilometers between two (lat, lon) pairs."""
    return haversine_distance_km(start[0], start[1], end[0], end[1])
