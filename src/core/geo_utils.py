"""
Sanitary Map AI - Geospatial Utilities
Coordinate validation, distance and bounding-box helpers for the report board.
"""

import math
from typing import Iterable, Optional, Tuple
from dataclasses import dataclass

from src.core.constants import EARTH_RADIUS_KM, LATITUDE_RANGE, LONGITUDE_RANGE


def is_valid_latitude(value: float) -> bool:
    """Check a latitude lies within [-90, 90]."""
    return LATITUDE_RANGE[0] <= value <= LATITUDE_RANGE[1]


def is_valid_longitude(value: float) -> bool:
    """Check a longitude lies within [-180, 180]."""
    return LONGITUDE_RANGE[0] <= value <= LONGITUDE_RANGE[1]


def is_valid_coordinate(lat: float, lng: float) -> bool:
    return is_valid_latitude(lat) and is_valid_longitude(lng)


def haversine_distance(
    lat1: float, lon1: float,
    lat2: float, lon2: float
) -> float:
    """
    Calculate the great-circle distance between two points on Earth.

    Args:
        lat1, lon1: First point coordinates in decimal degrees
        lat2, lon2: Second point coordinates in decimal degrees

    Returns:
        Distance in kilometers
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_lat / 2) ** 2 +
        math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


@dataclass
class BoundingBox:
    """Geographic bounding box."""
    west: float   # min longitude
    south: float  # min latitude
    east: float   # max longitude
    north: float  # max latitude

    def contains(self, lat: float, lng: float) -> bool:
        """Check if a coordinate is within the bounding box."""
        return (
            self.west <= lng <= self.east and
            self.south <= lat <= self.north
        )


def calculate_centroid(
    points: Iterable[Tuple[float, float]]
) -> Optional[Tuple[float, float]]:
    """
    Calculate the arithmetic centroid of (lat, lng) points.

    Args:
        points: Coordinates as (latitude, longitude) tuples

    Returns:
        (latitude, longitude) of the centroid, or None for no points
    """
    points = list(points)
    if not points:
        return None

    lat = sum(p[0] for p in points) / len(points)
    lng = sum(p[1] for p in points) / len(points)
    return (lat, lng)
