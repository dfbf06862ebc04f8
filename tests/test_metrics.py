"""
Tests for segment derivation and track summaries.
"""

from datetime import timedelta

import pytest

from conftest import make_points
from gps_track.core.metrics import calculate_track_summary, derive_track
from gps_track.core.models.track import TrackPoint
from gps_track.utils.errors import InvalidInputError


def test_known_speed_and_slope(points):
    segments = derive_track(points)

    assert len(segments) == 2
    for segment in segments:
        assert segment.speed == pytest.approx(3600, rel=1e-6)
        assert segment.slope == pytest.approx(0.01, rel=1e-6)
        assert segment.distance == pytest.approx(1.0, rel=1e-6)


def test_segment_carries_end_point_time_and_heart_rate():
    points = make_points(3, heart_rates=[100, 110, 120])
    segments = derive_track(points)

    assert [s.heart_rate for s in segments] == [110, 120]
    assert [s.time for s in segments] == [points[1].time, points[2].time]
    assert segments[0].coordinates == (points[0].coordinates, points[1].coordinates)


@pytest.mark.parametrize("count", [0, 1, 2, 5])
def test_segment_count_never_exceeds_pairs(count):
    assert len(derive_track(make_points(count))) <= max(0, count - 1)


def test_identical_coordinates_produce_no_segment():
    a, b = make_points(2)
    duplicate = TrackPoint(latitude=b.latitude, longitude=b.longitude, elevation=b.elevation + 5,
                           time=b.time + timedelta(seconds=3))
    segments = derive_track([a, b, duplicate])

    assert len(segments) == 1
    assert segments[0].coordinates[1] == b.coordinates


def test_speed_is_zero_for_equal_timestamps():
    a, b = make_points(2)
    b = TrackPoint(latitude=b.latitude, longitude=b.longitude, time=a.time)
    assert derive_track([a, b])[0].speed == 0


def test_speed_is_zero_for_missing_timestamps():
    segments = derive_track(make_points(3, step_seconds=None))
    assert [s.speed for s in segments] == [0, 0]
    assert all(s.time is None for s in segments)


def test_speed_is_zero_when_out_of_order():
    a, b = make_points(2)
    b = TrackPoint(latitude=b.latitude, longitude=b.longitude, time=a.time - timedelta(seconds=5))
    assert derive_track([a, b])[0].speed == 0


def test_slope_ignores_elevation_in_distance():
    segments = derive_track(make_points(2, step_km=0.5, step_elevation=-25))
    assert segments[0].slope == pytest.approx(-0.05, rel=1e-6)


def test_accepts_point_dicts():
    segments = derive_track([
        {'coordinates': [7.0, 46.0, 100], 'time': '2024-05-04T09:30:00Z'},
        {'coordinates': [7.0, 46.001, 101], 'time': '2024-05-04T09:30:10Z', 'heartRate': 130},
    ])
    assert len(segments) == 1
    assert segments[0].heart_rate == 130
    assert segments[0].speed > 0


@pytest.mark.parametrize("bad_input", [
    None,
    42,
    "not points",
    [{'time': '2024-05-04T09:30:00Z'}],
    [{'coordinates': ['a', 'b']}],
    [object()],
])
def test_malformed_input_raises(bad_input):
    with pytest.raises(InvalidInputError):
        derive_track(bad_input)


def test_mixed_naive_and_aware_timestamps_raise():
    a, b = make_points(2)
    b = TrackPoint(latitude=b.latitude, longitude=b.longitude, time=b.time.replace(tzinfo=None))
    with pytest.raises(InvalidInputError):
        derive_track([a, b])


def test_summary():
    points = make_points(4, step_km=0.1, step_seconds=60, step_elevation=2, heart_rates=[None, 120, 140, 160])
    segments = derive_track(points)
    summary = calculate_track_summary(segments, start_time=points[0].time)

    assert summary['distance'] == pytest.approx(0.3, rel=1e-6)
    assert summary['duration'] == timedelta(minutes=3)
    assert summary['avg_speed'] == pytest.approx(6.0, rel=1e-6)
    assert summary['max_speed'] == pytest.approx(6.0, rel=1e-6)
    assert summary['elevation_gain'] == pytest.approx(6)
    assert summary['elevation_loss'] == 0
    assert summary['avg_heart_rate'] == pytest.approx(140)
    assert summary['max_heart_rate'] == 160


def test_summary_of_empty_track():
    summary = calculate_track_summary([])
    assert summary['distance'] == 0
    assert summary['duration'] == timedelta(0)
    assert summary['avg_heart_rate'] is None


def test_summary_without_times_or_heart_rate():
    summary = calculate_track_summary(derive_track(make_points(3, step_seconds=None)))
    assert summary['duration'] == timedelta(0)
    assert summary['avg_speed'] == 0
    assert summary['max_heart_rate'] is None


@pytest.mark.parametrize("latitude, longitude", [(95.0, 0.0), (-90.5, 0.0), (0.0, 181.0), (float('nan'), 0.0)])
def test_point_off_the_globe_raises(latitude, longitude):
    with pytest.raises(InvalidInputError) as excinfo:
        derive_track([TrackPoint(0.0, 0.0), TrackPoint(latitude, longitude)])
    assert excinfo.value.details['index'] == 1


def test_directly_built_point_with_missing_values_raises():
    with pytest.raises(InvalidInputError):
        derive_track([TrackPoint(None, 0.0), TrackPoint(0.0, 0.0)])
    with pytest.raises(InvalidInputError):
        derive_track([TrackPoint(0.0, 0.0, elevation=None), TrackPoint(0.0, 0.001)])


def test_point_dict_off_the_globe_raises():
    with pytest.raises(InvalidInputError):
        derive_track([{'latitude': 46.0, 'longitude': 7.0}, {'latitude': 46.0, 'longitude': 200.0}])
