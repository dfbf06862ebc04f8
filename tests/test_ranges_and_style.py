"""
Tests for property ranges and the style expression builders.
"""

import math

import pytest

from conftest import make_points
from gps_track.core.metrics import derive_track
from gps_track.core.models.track import Range
from gps_track.core.ranges import compute_range
from gps_track.core.style import (
    StyleExpression,
    build_heart_rate_expression,
    build_paint,
    build_speed_expression,
)
from gps_track.utils.errors import ValidationError


def test_speed_range():
    points = make_points(3, step_seconds=1)
    slow = make_points(2, step_seconds=2)
    segments = derive_track(points) + derive_track(slow)

    speed_range = compute_range(segments, 'speed')

    assert speed_range.exists
    assert speed_range.min == pytest.approx(1800, rel=1e-6)
    assert speed_range.max == pytest.approx(3600, rel=1e-6)


def test_heart_rate_range_skips_missing_values():
    segments = derive_track(make_points(4, heart_rates=[None, 150, None, 130]))
    heart_rate_range = compute_range(segments, 'heart_rate')
    assert (heart_rate_range.min, heart_rate_range.max, heart_rate_range.exists) == (130, 150, True)


def test_range_without_heart_rate_does_not_exist():
    heart_rate_range = compute_range(derive_track(make_points(3)), 'heart_rate')

    assert heart_rate_range.exists is False
    assert heart_rate_range.min == math.inf
    assert heart_rate_range.max == -math.inf


def test_range_of_empty_track_does_not_exist():
    assert compute_range([], 'speed').exists is False


def test_unknown_property():
    with pytest.raises(ValidationError):
        compute_range([], 'cadence')


def test_rounded_range_rounds_halves_up():
    assert Range(min=2.5, max=17.49, exists=True).rounded() == Range(min=3, max=17, exists=True)
    assert Range().rounded().exists is False


def test_speed_expression_stops():
    expression = build_speed_expression(Range(min=0, max=20, exists=True))

    assert expression.to_expression() == [
        "interpolate", ["linear"], ["get", "speed"],
        0, "#FF0000",
        10, "#FFFF00",
        20, "#008000",
    ]


def test_heart_rate_expression_stops():
    expression = build_heart_rate_expression(Range(min=100, max=180, exists=True), min_width=2, max_width=10)

    assert expression.input_property == "heartRate"
    assert expression.stops == ((100, 2), (180, 10))


def test_crossed_bounds_return_previous_expression():
    previous = build_speed_expression(Range(min=0, max=20, exists=True))

    assert build_speed_expression(Range(min=30, max=20, exists=True), previous=previous) is previous
    assert build_heart_rate_expression(Range(min=180, max=100, exists=True), previous=None) is None


def test_missing_range_returns_previous_expression():
    previous = build_heart_rate_expression(Range(min=100, max=180, exists=True))
    assert build_heart_rate_expression(Range(), previous=previous) is previous


def test_evaluate_interpolates_colors_and_widths():
    colors = build_speed_expression(Range(min=0, max=20, exists=True))
    widths = build_heart_rate_expression(Range(min=100, max=200, exists=True), min_width=3, max_width=15)

    assert colors.evaluate({"speed": 0}) == "#FF0000"
    assert colors.evaluate({'speed': 10}) == "#ffff00"
    assert colors.evaluate({'speed': 5}) == "#ff8000"
    assert colors.evaluate({'speed': 99}) == "#008000"
    assert colors.evaluate({'speed': -1}) == "#FF0000"
    assert widths.evaluate({'heartRate': 150}) == pytest.approx(9)
    assert widths.evaluate({'heartRate': None}, default=3) == 3


def test_evaluate_with_equal_bounds():
    colors = build_speed_expression(Range(min=5, max=5, exists=True))
    assert colors.evaluate({'speed': 5}) == "#FF0000"
    assert colors.evaluate({'speed': 6}) == "#008000"


def test_expression_round_trips_through_maplibre_form():
    expression = build_heart_rate_expression(Range(min=90, max=170, exists=True))
    assert StyleExpression.from_expression(expression.to_expression()) == expression


@pytest.mark.parametrize("bad", [
    ["step", ["get", "speed"], 0, "red"],
    ["interpolate", ["exponential", 2], ["get", "speed"], 0, 1, 10, 2],
    ["interpolate", ["linear"], ["get", "speed"], 0],
    "red",
])
def test_from_expression_rejects_other_shapes(bad):
    with pytest.raises(ValueError):
        StyleExpression.from_expression(bad)


def test_paint_without_heart_rate_has_constant_width():
    paint = build_paint(build_speed_expression(Range(min=0, max=10, exists=True)), None)
    assert paint['line-width'] == 3
    assert paint['line-color'][0] == "interpolate"
