"""
Track metrics calculation.

This module turns an ordered list of recorded points into line segments
carrying speed and slope, and summarizes a track for display.
"""

import logging
from collections.abc import Mapping
from datetime import datetime, timedelta
import numpy as np
import pandas as pd
from typing import Any, Dict, Iterable, List, Optional

from gps_track.core.models.track import TrackPoint, TrackSegment, segments_dataframe
from gps_track.utils.errors import InvalidInputError
from gps_track.utils.geo import calculate_distance_km

logger = logging.getLogger(__name__)

SECONDS_PER_HOUR = 3600
METERS_PER_KILOMETER = 1000


def _validate_points(points: Iterable[Any]) -> List[TrackPoint]:
    if points is None or isinstance(points, (str, bytes, Mapping)):
        raise InvalidInputError(f"Expected a sequence of points, got {type(points).__name__}")
    try:
        items = list(points)
    except TypeError as e:
        raise InvalidInputError(f"Expected a sequence of points, got {type(points).__name__}") from e

    validated = []
    for index, item in enumerate(items):
        if not isinstance(item, (TrackPoint, Mapping)):
            raise InvalidInputError(f"Item is not a track point: {item!r}", index=index)
        try:
            validated.append(item.validate() if isinstance(item, TrackPoint) else TrackPoint.from_dict(item))
        except InvalidInputError as e:
            e.details['index'] = index
            raise
    return validated


def calculate_speed(point_a: TrackPoint, point_b: TrackPoint, distance_km: float) -> float:
    """
    Calculate the speed between two points.

    Returns 0 when either timestamp is missing or the points are not in
    increasing time order.

    Args:
        point_a: The starting point
        point_b: The ending point
        distance_km: Horizontal distance between the points in kilometers

    Returns:
        float: Speed in km/h
    """
    if point_a.time is None or point_b.time is None:
        return 0.0
    try:
        time_delta_seconds = (point_b.time - point_a.time).total_seconds()
    except TypeError as e:
        raise InvalidInputError(
            f"Cannot compare timestamps {point_a.time!r} and {point_b.time!r}"
        ) from e
    if time_delta_seconds <= 0:
        return 0.0
    return distance_km / time_delta_seconds * SECONDS_PER_HOUR


def calculate_slope(point_a: TrackPoint, point_b: TrackPoint, distance_km: float) -> float:
    """
    Calculate the slope between two points.

    Uses the horizontal distance only.

    Args:
        point_a: The starting point
        point_b: The ending point
        distance_km: Horizontal distance between the points in kilometers

    Returns:
        float: Elevation change per horizontal meter
    """
    if distance_km <= 0:
        return 0.0
    elevation_delta_meters = point_b.elevation - point_a.elevation
    return elevation_delta_meters / (distance_km * METERS_PER_KILOMETER)


def derive_track(points: Iterable[TrackPoint]) -> List[TrackSegment]:
    """
    Derive speed and slope segments from consecutive track points.

    Pairs of points at the same position produce no segment.

    Args:
        points: Track points in recording order

    Returns:
        list: One TrackSegment per consecutive pair with a positive distance

    Raises:
        InvalidInputError: If the input is not a well-formed point sequence
    """
    validated = _validate_points(points)

    segments = []
    for index, (point_a, point_b) in enumerate(zip(validated, validated[1:]), start=1):
        try:
            distance_km = calculate_distance_km(
                point_a.latitude, point_a.longitude, point_b.latitude, point_b.longitude
            )
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"Cannot measure distance to point {index}: {e}", index=index) from e
        if distance_km == 0:
            continue

        segments.append(TrackSegment(
            coordinates=(point_a.coordinates, point_b.coordinates),
            speed=calculate_speed(point_a, point_b, distance_km),
            slope=calculate_slope(point_a, point_b, distance_km),
            distance=distance_km,
            time=point_b.time,
            heart_rate=point_b.heart_rate,
        ))

    skipped = max(0, len(validated) - 1) - len(segments)
    if skipped:
        logger.debug(f"Skipped {skipped} zero-distance point pairs")
    logger.info(f"Derived {len(segments)} segments from {len(validated)} points")
    return segments


def calculate_track_summary(segments: List[TrackSegment], start_time: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Calculate summary metrics for a derived track.

    Args:
        segments: Segments produced by derive_track
        start_time: Time of the first recorded point, if known

    Returns:
        dict: Dictionary of track metrics including:
            - distance: Total distance in kilometers
            - duration: Time from the first to the last timestamp as timedelta
            - avg_speed: Distance over duration in km/h
            - max_speed: Fastest segment in km/h
            - elevation_gain: Total climb in meters
            - elevation_loss: Total descent in meters
            - avg_heart_rate: Distance-weighted mean in bpm, None without heart rate data
            - max_heart_rate: In bpm, None without heart rate data
    """
    metrics = {
        'distance': 0.0,
        'duration': timedelta(0),
        'avg_speed': 0.0,
        'max_speed': 0.0,
        'elevation_gain': 0.0,
        'elevation_loss': 0.0,
        'avg_heart_rate': None,
        'max_heart_rate': None,
    }
    if not segments:
        return metrics

    df = segments_dataframe(segments)
    metrics['distance'] = float(df['distance'].sum())
    metrics['max_speed'] = float(df['speed'].max())

    elevations = np.array([segment.coordinates for segment in segments])[:, :, 2]
    elevation_deltas = np.diff(elevations, axis=1).ravel()
    metrics['elevation_gain'] = float(elevation_deltas[elevation_deltas > 0].sum())
    metrics['elevation_loss'] = float(-elevation_deltas[elevation_deltas < 0].sum())

    recorded = [t for t in [start_time] + list(df['time']) if t is not None and not pd.isna(t)]
    if len(recorded) > 1:
        times = pd.to_datetime(pd.Series(recorded), utc=True)
        duration = (times.max() - times.min()).to_pytimedelta()
        metrics['duration'] = duration
        if duration.total_seconds() > 0:
            metrics['avg_speed'] = metrics['distance'] / duration.total_seconds() * SECONDS_PER_HOUR

    with_heart_rate = df.dropna(subset=['heart_rate'])
    if not with_heart_rate.empty:
        metrics['avg_heart_rate'] = float(np.average(with_heart_rate['heart_rate'], weights=with_heart_rate['distance']))
        metrics['max_heart_rate'] = float(with_heart_rate['heart_rate'].max())

    return metrics
