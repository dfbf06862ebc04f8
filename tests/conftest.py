"""
Shared fixtures for the track visualizer tests.
"""

import math
from datetime import datetime, timedelta, timezone

import pytest

from gps_track.core.map_host import FoliumMapHost
from gps_track.core.models.track import TrackPoint

EARTH_RADIUS_KM = 6371.009
START_TIME = datetime(2024, 5, 4, 9, 30, tzinfo=timezone.utc)


def km_to_lat_degrees(km):
    """Latitude span of a given distance along a meridian."""
    return math.degrees(km / EARTH_RADIUS_KM)


def make_points(count, step_km=1.0, step_seconds=1, step_elevation=10.0, heart_rates=None):
    """Points heading north from (0, 0), one every step_seconds."""
    points = []
    for i in range(count):
        points.append(TrackPoint(
            latitude=km_to_lat_degrees(step_km * i),
            longitude=0.0,
            elevation=step_elevation * i,
            time=START_TIME + timedelta(seconds=step_seconds * i) if step_seconds is not None else None,
            heart_rate=heart_rates[i] if heart_rates is not None else None,
        ))
    return points


def make_gpx(points, name="Morning Ride"):
    """
    Build GPX text for (lat, lon, ele, seconds, hr) tuples.

    Heart rate is written as a Garmin TrackPointExtension when not None.
    """
    trkpts = []
    for lat, lon, ele, seconds, hr in points:
        parts = [f'<trkpt lat="{lat}" lon="{lon}">']
        if ele is not None:
            parts.append(f'<ele>{ele}</ele>')
        if seconds is not None:
            time = (START_TIME + timedelta(seconds=seconds)).strftime('%Y-%m-%dT%H:%M:%SZ')
            parts.append(f'<time>{time}</time>')
        if hr is not None:
            parts.append(
                '<extensions><gpxtpx:TrackPointExtension>'
                f'<gpxtpx:hr>{hr}</gpxtpx:hr>'
                '</gpxtpx:TrackPointExtension></extensions>'
            )
        parts.append('</trkpt>')
        trkpts.append(''.join(parts))

    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<gpx version="1.1" creator="tests" xmlns="http://www.topografix.com/GPX/1/1" '
        'xmlns:gpxtpx="http://www.garmin.com/xmlschemas/TrackPointExtension/v1">\n'
        f'<trk><name>{name}</name><trkseg>\n'
        + '\n'.join(trkpts) +
        '\n</trkseg></trk>\n</gpx>\n'
    )


@pytest.fixture
def points():
    return make_points(3)


@pytest.fixture
def map_host():
    return FoliumMapHost()


@pytest.fixture
def gpx_with_heart_rate():
    return make_gpx([
        (46.000, 7.000, 1000, 0, 120),
        (46.001, 7.000, 1005, 10, 135),
        (46.002, 7.001, 1012, 20, 150),
        (46.003, 7.001, 1010, 30, 142),
    ])


@pytest.fixture
def gpx_without_heart_rate():
    return make_gpx([
        (47.000, 8.000, 400, 0, None),
        (47.001, 8.000, 402, 5, None),
        (47.001, 8.000, 402, 6, None),
        (47.002, 8.002, 398, 12, None),
    ], name="Evening Walk")
