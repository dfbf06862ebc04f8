"""
Track data models.

This module defines the core data structures for track visualization,
providing type safety and encapsulation of track-related data.
"""

import math
import pandas as pd
from datetime import datetime
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from gps_track.config.settings import DEFAULT_MAX_WIDTH, DEFAULT_MIN_WIDTH
from gps_track.utils.errors import InvalidInputError

if TYPE_CHECKING:
    from gps_track.core.style import StyleExpression

Coordinate = Tuple[float, float, float]


def _parse_time(value: Any) -> Optional[datetime]:
    if value is None or value is pd.NaT:
        return None
    if isinstance(value, datetime):
        return value
    try:
        return pd.Timestamp(value).to_pydatetime()
    except (ValueError, TypeError) as e:
        raise InvalidInputError(f"Invalid timestamp: {value!r}") from e


def _check_position(latitude: Any, longitude: Any, elevation: Any) -> Coordinate:
    """
    Convert a position to floats and check it lies on the globe.

    Raises:
        InvalidInputError: If a value is non-finite or out of range
        TypeError, ValueError: If a value is not numeric
    """
    latitude, longitude, elevation = float(latitude), float(longitude), float(elevation)
    if not all(math.isfinite(v) for v in (latitude, longitude, elevation)):
        raise InvalidInputError(f"Non-finite position: ({latitude}, {longitude}, {elevation})")
    if not -90 <= latitude <= 90:
        raise InvalidInputError(f"Latitude {latitude} outside [-90, 90]")
    if not -180 <= longitude <= 180:
        raise InvalidInputError(f"Longitude {longitude} outside [-180, 180]")
    return latitude, longitude, elevation


def _parse_heart_rate(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        heart_rate = float(value)
    except (ValueError, TypeError) as e:
        raise InvalidInputError(f"Invalid heart rate: {value!r}") from e
    # Devices write 0 when the strap lost contact
    if not math.isfinite(heart_rate) or heart_rate <= 0:
        return None
    return heart_rate


@dataclass(frozen=True)
class TrackPoint:
    """
    Single recorded point in a GPS track.
    """
    latitude: float
    longitude: float
    elevation: float = 0.0  # in meters
    time: Optional[datetime] = None
    heart_rate: Optional[float] = None  # in bpm

    @property
    def coordinates(self) -> Coordinate:
        """Get the point as (lon, lat, elevation)."""
        return (self.longitude, self.latitude, self.elevation)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TrackPoint':
        """
        Create a TrackPoint from a dictionary.

        Accepts either 'latitude'/'longitude'/'elevation' keys or a GeoJSON-style
        'coordinates' list of [lon, lat, elevation].

        Raises:
            InvalidInputError: If the coordinates are missing, not numeric or off the globe
        """
        try:
            if 'coordinates' in data:
                coordinates = list(data['coordinates'])
                longitude, latitude = coordinates[0], coordinates[1]
                elevation = coordinates[2] if len(coordinates) > 2 else None
            else:
                latitude = data['latitude']
                longitude = data['longitude']
                elevation = data.get('elevation')
            latitude, longitude, elevation = _check_position(
                latitude, longitude, elevation if elevation is not None else 0.0
            )
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise InvalidInputError(f"Point has missing or invalid coordinates: {data!r}") from e

        return cls(
            latitude=latitude,
            longitude=longitude,
            elevation=elevation,
            time=_parse_time(data.get('time')),
            heart_rate=_parse_heart_rate(data.get('heart_rate', data.get('heartRate')))
        )

    def validate(self) -> 'TrackPoint':
        """
        Check a point that was built directly rather than through from_dict.

        Raises:
            InvalidInputError: If the position is invalid or the time is not a datetime
        """
        try:
            _check_position(self.latitude, self.longitude, self.elevation)
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"Point has invalid coordinates: {self!r}") from e
        if self.time is not None and not isinstance(self.time, datetime):
            raise InvalidInputError(f"Invalid timestamp: {self.time!r}")
        return self


@dataclass(frozen=True)
class TrackSegment:
    """
    Line piece between two consecutive recorded points.

    The time and heart rate are those of the end point.
    """
    coordinates: Tuple[Coordinate, Coordinate]
    speed: float  # in km/h
    slope: float  # elevation change per horizontal meter
    distance: float  # in km
    time: Optional[datetime] = None
    heart_rate: Optional[float] = None

    def to_feature(self) -> Dict[str, Any]:
        """Convert segment to a GeoJSON LineString feature."""
        return {
            'type': 'Feature',
            'geometry': {
                'type': 'LineString',
                'coordinates': [list(coordinate) for coordinate in self.coordinates],
            },
            'properties': {
                'speed': self.speed,
                'slope': self.slope,
                'time': self.time.isoformat() if self.time is not None else None,
                'heartRate': self.heart_rate,
            },
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert segment to dictionary."""
        (start_lon, start_lat, start_ele), (end_lon, end_lat, end_ele) = self.coordinates
        return {
            'start_latitude': start_lat,
            'start_longitude': start_lon,
            'end_latitude': end_lat,
            'end_longitude': end_lon,
            'end_elevation': end_ele,
            'distance': self.distance,
            'speed': self.speed,
            'slope': self.slope,
            'time': self.time,
            'heart_rate': self.heart_rate,
        }


def segments_to_feature_collection(segments: List[TrackSegment]) -> Dict[str, Any]:
    """Wrap segments in a GeoJSON FeatureCollection."""
    return {
        'type': 'FeatureCollection',
        'features': [segment.to_feature() for segment in segments],
    }


def segments_dataframe(segments: List[TrackSegment]) -> pd.DataFrame:
    """Convert segments to DataFrame."""
    return pd.DataFrame([segment.to_dict() for segment in segments])


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up."""
    return int(math.floor(value + 0.5))


@dataclass
class Range:
    """
    Span of a numeric property across all segments of a track.

    When no segment carries the property, exists is False and min/max keep
    their infinite sentinels, which must never be rendered.
    """
    min: float = math.inf
    max: float = -math.inf
    exists: bool = False

    @property
    def is_ordered(self) -> bool:
        """Check that the bounds are not crossed."""
        return self.max >= self.min

    @property
    def midpoint(self) -> float:
        return (self.min + self.max) / 2

    def rounded(self) -> 'Range':
        """Get a copy with integer bounds, as shown in the range fields."""
        if not self.exists:
            return Range()
        return Range(min=round_half_up(self.min), max=round_half_up(self.max), exists=True)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'min': self.min if self.exists else None,
            'max': self.max if self.exists else None,
            'exists': self.exists,
        }


@dataclass
class TrackSession:
    """
    Everything derived from one loaded track file.

    A new file load builds a complete new session; sessions are never merged.
    """
    name: str
    segments: List[TrackSegment]
    speed_range: Range
    heart_rate_range: Range
    raw_ranges: Dict[str, Range] = field(default_factory=dict)
    speed_style: Optional['StyleExpression'] = None
    width_style: Optional['StyleExpression'] = None
    min_width: float = DEFAULT_MIN_WIDTH
    max_width: float = DEFAULT_MAX_WIDTH
    summary: Dict[str, Any] = field(default_factory=dict)

    @property
    def has_heart_rate(self) -> bool:
        return self.heart_rate_range.exists

    @property
    def feature_collection(self) -> Dict[str, Any]:
        return segments_to_feature_collection(self.segments)
