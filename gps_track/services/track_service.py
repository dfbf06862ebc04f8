"""
Track loading service.

This module provides the business logic for loading a track file into a
session and drawing it, separating these concerns from UI components.
"""

import itertools
import logging
from typing import Any, List, Optional

from gps_track.config.settings import StyleConfig
from gps_track.core.gpx import extract_points, get_track_name, parse_gpx, read_track_file
from gps_track.core.map_host import FoliumMapHost, MapHost
from gps_track.core.metrics import calculate_track_summary, derive_track
from gps_track.core.models.track import TrackPoint, TrackSession
from gps_track.core.ranges import compute_range
from gps_track.core.renderer import TrackRenderer
from gps_track.core.style import build_heart_rate_expression, build_paint, build_speed_expression
from gps_track.services.range_controller import RangeEditController

logger = logging.getLogger(__name__)


def build_session(points: List[TrackPoint], name: str = "Track") -> TrackSession:
    """
    Derive everything shown for one track.

    Range fields hold rounded bounds and the styles are built from them, so
    the line matches the numbers the user sees.

    Args:
        points: Track points in recording order
        name: Display name of the track

    Returns:
        TrackSession: A complete new session
    """
    segments = derive_track(points)
    raw_ranges = {
        'speed': compute_range(segments, 'speed'),
        'heart_rate': compute_range(segments, 'heart_rate'),
        'slope': compute_range(segments, 'slope'),
    }
    speed_range = raw_ranges['speed'].rounded()
    heart_rate_range = raw_ranges['heart_rate'].rounded()

    session = TrackSession(
        name=name,
        segments=segments,
        speed_range=speed_range,
        heart_rate_range=heart_rate_range,
        raw_ranges=raw_ranges,
        min_width=StyleConfig.MIN_WIDTH,
        max_width=StyleConfig.MAX_WIDTH,
        summary=calculate_track_summary(segments, start_time=points[0].time if points else None),
    )
    session.speed_style = build_speed_expression(speed_range)
    if session.has_heart_rate:
        session.width_style = build_heart_rate_expression(
            heart_rate_range, min_width=session.min_width, max_width=session.max_width
        )
    return session


class TrackService:
    """
    Loads track files and keeps the session of the last completed load.

    Each load gets a token; a load whose token is no longer the latest is
    discarded when it completes, so the last selected file wins.
    """

    def __init__(self, map_host: Optional[MapHost] = None):
        self.map_host = map_host if map_host is not None else FoliumMapHost()
        self.renderer = TrackRenderer(self.map_host)
        self.session: Optional[TrackSession] = None
        self.controller: Optional[RangeEditController] = None
        self._tokens = itertools.count(1)
        self._current_token = 0

    def begin_load(self) -> int:
        """Start a new load, superseding any pending one."""
        self._current_token = next(self._tokens)
        return self._current_token

    def is_current(self, token: int) -> bool:
        return token == self._current_token

    def complete_load(self, token: int, text: str, file_name: Optional[str] = None) -> Optional[TrackSession]:
        """
        Finish a load with the text that was read.

        Args:
            token: Token returned by begin_load
            text: GPX document text
            file_name: Name of the file, used when the GPX has no track name

        Returns:
            The new session, or None if the load was superseded or could not be drawn

        Raises:
            FormatError: If the text is not valid GPX
            InvalidInputError: If the extracted points are malformed
        """
        if not self.is_current(token):
            logger.info(f"Discarding superseded load {token} of {file_name or 'track'}")
            return None

        gpx = parse_gpx(text)
        points = extract_points(gpx)
        session = build_session(points, get_track_name(gpx, file_name))

        paint = build_paint(session.speed_style, session.width_style)
        if not self.renderer.render(session.feature_collection, paint):
            logger.warning(f"Could not draw {session.name}, keeping the previous track")
            return None

        self.session = session
        self.controller = RangeEditController(self.renderer, session)
        logger.info(f"Loaded {session.name}: {len(session.segments)} segments, "
                    f"heart rate {'present' if session.has_heart_rate else 'absent'}")
        return session

    def load_file(self, track_file: Any, file_name: Optional[str] = None) -> Optional[TrackSession]:
        """
        Read, parse and draw a track file.

        Args:
            track_file: A path or a file-like object
            file_name: Name of the file, defaults to the object's name

        Raises:
            ReadError: If the file cannot be read
            FormatError: If the file is not valid GPX
        """
        token = self.begin_load()
        text = read_track_file(track_file)
        if file_name is None:
            file_name = track_file if isinstance(track_file, str) else getattr(track_file, 'name', None)
        return self.complete_load(token, text, file_name)

    def clear(self) -> None:
        """Remove the track from the map and forget the session."""
        self.renderer.remove()
        self.session = None
        self.controller = None
