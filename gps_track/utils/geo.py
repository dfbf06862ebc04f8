"""
Geographic calculations utility module.

This module contains functions for calculating distances and
bounding boxes of tracks.
"""

import math
from typing import Any, Dict, Iterable, List, Sequence
from geopy.distance import great_circle


def calculate_distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the great-circle distance between two points in kilometers.

    Elevation is ignored.

    Args:
        lat1: Latitude of first point in degrees
        lon1: Longitude of first point in degrees
        lat2: Latitude of second point in degrees
        lon2: Longitude of second point in degrees

    Returns:
        float: Distance in kilometers
    """
    return great_circle((lat1, lon1), (lat2, lon2)).kilometers


def calculate_bounds(features: Iterable[Dict[str, Any]]) -> Dict[str, float]:
    """
    Calculate the bounding box of a list of LineString features.

    Args:
        features: GeoJSON features whose geometry holds [lon, lat, ...] coordinates

    Returns:
        dict: min_lat, max_lat, min_lon, max_lon. Infinite when there are no coordinates.
    """
    min_lat, max_lat = math.inf, -math.inf
    min_lon, max_lon = math.inf, -math.inf

    for feature in features:
        for coordinate in feature['geometry']['coordinates']:
            lon, lat = coordinate[0], coordinate[1]
            min_lat = min(min_lat, lat)
            max_lat = max(max_lat, lat)
            min_lon = min(min_lon, lon)
            max_lon = max(max_lon, lon)

    return {
        'min_lat': min_lat,
        'max_lat': max_lat,
        'min_lon': min_lon,
        'max_lon': max_lon,
    }


def bounds_to_corners(bounds: Dict[str, float]) -> List[List[float]]:
    """Convert a bounds dict to [[min_lon, min_lat], [max_lon, max_lat]]."""
    return [
        [bounds['min_lon'], bounds['min_lat']],
        [bounds['max_lon'], bounds['max_lat']],
    ]


def is_valid_coordinate(coordinate: Sequence[Any]) -> bool:
    """Check that a coordinate holds at least finite lon and lat values."""
    if coordinate is None or len(coordinate) < 2:
        return False
    try:
        return all(math.isfinite(float(value)) for value in coordinate[:3])
    except (TypeError, ValueError):
        return False
