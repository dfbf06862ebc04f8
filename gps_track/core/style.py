"""
Style expressions for the track line.

A style expression maps a segment property to a visual property by linear
interpolation between ordered stops. Speed drives the line color and heart
rate drives the line width.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

from matplotlib.colors import to_hex, to_rgb

from gps_track.config.settings import StyleConfig
from gps_track.core.models.track import Range

logger = logging.getLogger(__name__)

Stop = Tuple[float, Union[str, float]]

# Segment attribute name -> GeoJSON feature property name
FEATURE_PROPERTIES = {
    'speed': 'speed',
    'heart_rate': 'heartRate',
    'slope': 'slope',
}


def _interpolate_value(start: Union[str, float], end: Union[str, float], t: float) -> Union[str, float]:
    if isinstance(start, str):
        start_rgb, end_rgb = to_rgb(start), to_rgb(end)
        return to_hex(tuple(s + (e - s) * t for s, e in zip(start_rgb, end_rgb)))
    return start + (end - start) * t


@dataclass(frozen=True)
class StyleExpression:
    """
    Piecewise-linear mapping from a feature property to a visual value.

    Stops are (domain value, visual value) pairs in ascending domain order.
    Visual values are either hex colors or numbers.
    """
    input_property: str
    stops: Tuple[Stop, ...]

    def to_expression(self) -> List[Any]:
        """Convert to a MapLibre 'interpolate' expression."""
        expression = ["interpolate", ["linear"], ["get", self.input_property]]
        for domain_value, visual_value in self.stops:
            expression.extend([domain_value, visual_value])
        return expression

    def evaluate(self, properties: Dict[str, Any], default: Optional[Union[str, float]] = None) -> Optional[Union[str, float]]:
        """
        Evaluate the expression for a feature's properties.

        Values outside the domain are clamped to the first or last stop.

        Args:
            properties: GeoJSON feature properties
            default: Returned when the property is missing

        Returns:
            Interpolated color or number
        """
        value = properties.get(self.input_property)
        if value is None:
            return default

        first_domain, first_visual = self.stops[0]
        if value <= first_domain:
            return first_visual
        for (lower, lower_visual), (upper, upper_visual) in zip(self.stops, self.stops[1:]):
            if value <= upper:
                return _interpolate_value(lower_visual, upper_visual, (value - lower) / (upper - lower))
        return self.stops[-1][1]

    @classmethod
    def from_expression(cls, expression: List[Any]) -> 'StyleExpression':
        """
        Create a StyleExpression from a MapLibre linear 'interpolate' expression.

        Raises:
            ValueError: If the expression has another shape
        """
        if (
            not isinstance(expression, list)
            or len(expression) < 5
            or expression[0] != "interpolate"
            or expression[1] != ["linear"]
            or not isinstance(expression[2], list)
            or len(expression[2]) != 2
            or expression[2][0] != "get"
            or (len(expression) - 3) % 2 != 0
        ):
            raise ValueError(f"Unsupported style expression: {expression!r}")
        values = expression[3:]
        return cls(input_property=expression[2][1], stops=tuple(zip(values[0::2], values[1::2])))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'input_property': self.input_property,
            'stops': [list(stop) for stop in self.stops],
        }


def _can_build(range_: Range, name: str) -> bool:
    if not range_.exists:
        logger.debug(f"Not building {name} expression: no data")
        return False
    if not range_.is_ordered:
        logger.debug(f"Not building {name} expression: max {range_.max} < min {range_.min}")
        return False
    return True


def build_speed_expression(
    speed_range: Range,
    previous: Optional[StyleExpression] = None,
    slow_color: str = StyleConfig.SLOW_COLOR,
    mid_color: str = StyleConfig.MID_COLOR,
    fast_color: str = StyleConfig.FAST_COLOR
) -> Optional[StyleExpression]:
    """
    Build the speed color ramp.

    Args:
        speed_range: Speed bounds as shown in the range fields
        previous: Expression currently in effect
        slow_color: Color at the minimum speed
        mid_color: Color halfway between min and max
        fast_color: Color at the maximum speed

    Returns:
        StyleExpression, or previous unchanged when the bounds are crossed
    """
    if not _can_build(speed_range, 'speed'):
        return previous

    return StyleExpression(
        input_property=FEATURE_PROPERTIES['speed'],
        stops=(
            (speed_range.min, slow_color),
            (speed_range.midpoint, mid_color),
            (speed_range.max, fast_color),
        ),
    )


def build_heart_rate_expression(
    heart_rate_range: Range,
    previous: Optional[StyleExpression] = None,
    min_width: float = StyleConfig.MIN_WIDTH,
    max_width: float = StyleConfig.MAX_WIDTH
) -> Optional[StyleExpression]:
    """
    Build the heart rate width ramp.

    Args:
        heart_rate_range: Heart rate bounds as shown in the range fields
        previous: Expression currently in effect
        min_width: Line width at the minimum heart rate
        max_width: Line width at the maximum heart rate

    Returns:
        StyleExpression, or previous unchanged when the bounds are crossed
    """
    if not _can_build(heart_rate_range, 'heart rate'):
        return previous

    return StyleExpression(
        input_property=FEATURE_PROPERTIES['heart_rate'],
        stops=(
            (heart_rate_range.min, min_width),
            (heart_rate_range.max, max_width),
        ),
    )


def build_paint(
    speed_style: Optional[StyleExpression],
    width_style: Optional[StyleExpression] = None,
    line_width: float = StyleConfig.LINE_WIDTH,
    line_color: str = StyleConfig.MID_COLOR
) -> Dict[str, Any]:
    """
    Build the paint properties of the track layer.

    Without a width expression the line keeps a constant width.
    """
    return {
        'line-color': speed_style.to_expression() if speed_style is not None else line_color,
        'line-width': width_style.to_expression() if width_style is not None else line_width,
    }
