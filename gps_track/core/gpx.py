"""
GPX file parsing and handling.

This module contains functions for reading GPX files and extracting
the recorded points with their time and heart rate.
"""

import os
import logging
import gpxpy
import gpxpy.gpx
from typing import Any, List, Optional

from gps_track.config.settings import DEFAULT_FILE_ENCODING
from gps_track.core.models.track import TrackPoint
from gps_track.utils.errors import FormatError, InvalidInputError, ReadError

logger = logging.getLogger(__name__)

# Local tag names used for heart rate by Garmin and other device extensions
HEART_RATE_TAGS = {'hr', 'heartrate', 'heart'}


def read_track_file(track_file: Any, encoding: str = DEFAULT_FILE_ENCODING) -> str:
    """
    Read the text of a track file.

    Args:
        track_file: A path or a file-like object (such as a Streamlit upload)
        encoding: Encoding used when the file yields bytes

    Returns:
        str: The file contents

    Raises:
        ReadError: If the file cannot be read or decoded
    """
    name = track_file if isinstance(track_file, (str, os.PathLike)) else getattr(track_file, 'name', None)
    try:
        if isinstance(track_file, (str, os.PathLike)):
            with open(track_file, 'rb') as f:
                content = f.read()
        else:
            content = track_file.read()
        if isinstance(content, bytes):
            content = content.decode(encoding)
    except (OSError, UnicodeDecodeError, AttributeError) as e:
        raise ReadError(f"Failed to load file. Reason: {e}", file_path=str(name) if name else None) from e
    return content


def parse_gpx(text: str) -> gpxpy.gpx.GPX:
    """
    Parse GPX text.

    Raises:
        FormatError: If the text is not a valid GPX document
    """
    try:
        return gpxpy.parse(text)
    except gpxpy.gpx.GPXException as e:
        raise FormatError(f"Invalid GPX data: {e}", data_source='gpx') from e


def _local_name(tag: Any) -> str:
    if not isinstance(tag, str):
        return ''
    return tag.rsplit('}', 1)[-1].rsplit(':', 1)[-1].lower()


def extract_heart_rate(point: gpxpy.gpx.GPXTrackPoint) -> Optional[float]:
    """
    Get the heart rate stored in a point's extensions.

    Returns:
        Heart rate in bpm or None
    """
    for extension in point.extensions or []:
        for element in extension.iter():
            if _local_name(element.tag) in HEART_RATE_TAGS and element.text:
                try:
                    return float(element.text.strip())
                except ValueError:
                    logger.warning(f"Ignoring non-numeric heart rate: {element.text!r}")
                    return None
    return None


def _to_track_point(point: Any) -> TrackPoint:
    return TrackPoint.from_dict({
        'latitude': point.latitude,
        'longitude': point.longitude,
        'elevation': point.elevation,
        'time': point.time,
        'heart_rate': extract_heart_rate(point),
    })


def extract_points(gpx: gpxpy.gpx.GPX) -> List[TrackPoint]:
    """
    Extract the recorded points of a GPX document in order.

    Track points of all tracks and track segments are concatenated. Files
    without tracks fall back to their route points.

    Args:
        gpx: Parsed GPX document

    Returns:
        list: TrackPoint objects

    Raises:
        FormatError: If a point has invalid coordinates
    """
    raw_points = [
        point
        for track in gpx.tracks
        for segment in track.segments
        for point in segment.points
    ]
    if not raw_points:
        raw_points = [point for route in gpx.routes for point in route.points]

    try:
        points = [_to_track_point(point) for point in raw_points]
    except InvalidInputError as e:
        raise FormatError(e.message, data_source='gpx') from e

    logger.info(f"Extracted {len(points)} points from GPX")
    return points


def get_track_name(gpx: gpxpy.gpx.GPX, file_name: Optional[str] = None) -> str:
    """
    Get a display name for a track.

    Uses the first track name, then the file name without extension.
    """
    if gpx.tracks and gpx.tracks[0].name:
        return gpx.tracks[0].name
    if gpx.name:
        return gpx.name
    if file_name:
        return os.path.splitext(os.path.basename(file_name))[0]
    return "Track"
