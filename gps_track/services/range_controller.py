"""
Range edit handling.

This module reacts to edits of the speed and heart rate range fields,
rebuilding the style expressions and updating the rendered track style
without recomputing any segments.
"""

import enum
import logging
import math
from typing import Any, Dict, Optional

from gps_track.core.models.track import Range, TrackSession
from gps_track.core.renderer import TrackRenderer
from gps_track.core.style import build_heart_rate_expression, build_speed_expression

logger = logging.getLogger(__name__)


class RangeState(enum.Enum):
    """Ordering state of an editable range."""
    VALID = "valid"
    INVALID_ORDERING = "invalid_ordering"


def parse_field_value(value: Any) -> Optional[float]:
    """
    Parse the value of a numeric input field.

    Empty and non-numeric input is ignored, as it is while the user is typing.

    Returns:
        float or None
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if value == "":
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _state_of(range_: Range) -> RangeState:
    return RangeState.VALID if range_.is_ordered else RangeState.INVALID_ORDERING


class RangeEditController:
    """
    Applies range field edits to a track session.

    Each range is either VALID or INVALID_ORDERING. While a range's max is
    below its min, its style is left as it was until the ordering is fixed.
    """

    def __init__(self, renderer: TrackRenderer, session: TrackSession):
        self.renderer = renderer
        self.session = session
        self.states: Dict[str, RangeState] = {
            'speed': RangeState.VALID,
            'heart_rate': RangeState.VALID,
        }

    @property
    def speed_state(self) -> RangeState:
        return self.states['speed']

    @property
    def heart_rate_state(self) -> RangeState:
        return self.states['heart_rate']

    # Speed

    def set_speed_min(self, value: Any) -> bool:
        return self._edit_speed('min', value)

    def set_speed_max(self, value: Any) -> bool:
        return self._edit_speed('max', value)

    def _edit_speed(self, bound: str, value: Any) -> bool:
        number = parse_field_value(value)
        if number is None:
            return False
        setattr(self.session.speed_range, bound, number)
        return self.update_speed_style()

    def update_speed_style(self) -> bool:
        """
        Rebuild the speed color ramp and apply it to the rendered track.

        Returns:
            bool: True if the map style was updated
        """
        self.states['speed'] = _state_of(self.session.speed_range)
        if self.states['speed'] is RangeState.INVALID_ORDERING:
            logger.debug("Speed range max below min, keeping current color ramp")
            return False

        style = build_speed_expression(self.session.speed_range, previous=self.session.speed_style)
        self.session.speed_style = style
        return self.renderer.update_style('line-color', style)

    # Heart rate

    def set_heart_rate_min(self, value: Any) -> bool:
        return self._edit_heart_rate('min', value)

    def set_heart_rate_max(self, value: Any) -> bool:
        return self._edit_heart_rate('max', value)

    def set_width_min(self, value: Any) -> bool:
        return self._edit_width('min_width', value)

    def set_width_max(self, value: Any) -> bool:
        return self._edit_width('max_width', value)

    def _edit_heart_rate(self, bound: str, value: Any) -> bool:
        if not self.session.has_heart_rate:
            return False
        number = parse_field_value(value)
        if number is None:
            return False
        setattr(self.session.heart_rate_range, bound, number)
        return self.update_heart_rate_style()

    def _edit_width(self, attribute: str, value: Any) -> bool:
        if not self.session.has_heart_rate:
            return False
        number = parse_field_value(value)
        if number is None or number < 0:
            return False
        setattr(self.session, attribute, number)
        return self.update_heart_rate_style()

    def update_heart_rate_style(self) -> bool:
        """
        Rebuild the heart rate width ramp and apply it to the rendered track.

        Returns:
            bool: True if the map style was updated
        """
        if not self.session.has_heart_rate:
            return False

        self.states['heart_rate'] = _state_of(self.session.heart_rate_range)
        if self.states['heart_rate'] is RangeState.INVALID_ORDERING:
            logger.debug("Heart rate range max below min, keeping current width ramp")
            return False

        style = build_heart_rate_expression(
            self.session.heart_rate_range,
            previous=self.session.width_style,
            min_width=self.session.min_width,
            max_width=self.session.max_width,
        )
        self.session.width_style = style
        return self.renderer.update_style('line-width', style)
