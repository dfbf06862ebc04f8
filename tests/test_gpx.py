"""
Tests for GPX reading and point extraction.
"""

import io

import pytest

from conftest import START_TIME, make_gpx
from gps_track.core.gpx import extract_points, get_track_name, parse_gpx, read_track_file
from gps_track.utils.errors import FormatError, ReadError


def test_extracts_points_with_heart_rate(gpx_with_heart_rate):
    points = extract_points(parse_gpx(gpx_with_heart_rate))

    assert len(points) == 4
    assert [p.heart_rate for p in points] == [120, 135, 150, 142]
    assert points[0].coordinates == (7.0, 46.0, 1000)
    assert points[0].time == START_TIME


def test_points_without_heart_rate(gpx_without_heart_rate):
    points = extract_points(parse_gpx(gpx_without_heart_rate))
    assert all(p.heart_rate is None for p in points)


def test_zero_heart_rate_is_absent():
    points = extract_points(parse_gpx(make_gpx([(46.0, 7.0, 0, 0, 0), (46.001, 7.0, 0, 1, 110)])))
    assert [p.heart_rate for p in points] == [None, 110]


def test_missing_elevation_and_time():
    points = extract_points(parse_gpx(make_gpx([(46.0, 7.0, None, None, None)])))
    assert points[0].elevation == 0
    assert points[0].time is None


def test_route_points_are_used_without_tracks():
    text = (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<gpx version="1.1" creator="tests" xmlns="http://www.topografix.com/GPX/1/1">'
        '<rte><name>Planned</name>'
        '<rtept lat="46.0" lon="7.0"><ele>500</ele></rtept>'
        '<rtept lat="46.01" lon="7.0"><ele>510</ele></rtept>'
        '</rte></gpx>'
    )
    points = extract_points(parse_gpx(text))
    assert [p.latitude for p in points] == [46.0, 46.01]


@pytest.mark.parametrize("text", ["", "not xml at all", "<gpx><trk><trkseg>"])
def test_malformed_gpx_raises_format_error(text):
    with pytest.raises(FormatError):
        parse_gpx(text)


def test_read_from_path(tmp_path, gpx_with_heart_rate):
    path = tmp_path / "ride.gpx"
    path.write_text(gpx_with_heart_rate, encoding='utf-8')
    assert read_track_file(str(path)) == gpx_with_heart_rate


def test_read_from_upload(gpx_with_heart_rate):
    upload = io.BytesIO(gpx_with_heart_rate.encode('utf-8'))
    upload.name = "ride.gpx"
    assert read_track_file(upload) == gpx_with_heart_rate


def test_read_errors(tmp_path):
    with pytest.raises(ReadError):
        read_track_file(str(tmp_path / "missing.gpx"))
    with pytest.raises(ReadError):
        read_track_file(io.BytesIO(b'\xff\xfe\xfa'))
    with pytest.raises(ReadError):
        read_track_file(object())


def test_track_name(gpx_with_heart_rate):
    assert get_track_name(parse_gpx(gpx_with_heart_rate)) == "Morning Ride"

    unnamed = parse_gpx(make_gpx([(46.0, 7.0, 0, 0, None)], name=""))
    assert get_track_name(unnamed, "uploads/lunch_run.gpx") == "lunch_run"
    assert get_track_name(unnamed) == "Track"


def test_latitude_off_the_globe_raises_format_error():
    with pytest.raises(FormatError):
        extract_points(parse_gpx(make_gpx([(95.0, 7.0, 0, 0, None), (46.0, 7.0, 0, 1, None)])))
