"""
Property ranges across track segments.

The range of a property drives both the editable min/max fields and the
domain of the style expressions.
"""

import logging
from typing import Callable, Dict, Iterable, Optional

from gps_track.core.models.track import Range, TrackSegment
from gps_track.utils.errors import ValidationError

logger = logging.getLogger(__name__)

RANGE_PROPERTIES: Dict[str, Callable[[TrackSegment], Optional[float]]] = {
    'speed': lambda segment: segment.speed,
    'heart_rate': lambda segment: segment.heart_rate,
    'slope': lambda segment: segment.slope,
}


def compute_range(segments: Iterable[TrackSegment], prop: str) -> Range:
    """
    Compute the min/max of a segment property.

    Segments without a value for the property are ignored. Values are not
    rounded here; use Range.rounded() for the fields shown to the user.

    Args:
        segments: Track segments
        prop: One of 'speed', 'heart_rate' or 'slope'

    Returns:
        Range: exists is False when no segment has a value
    """
    accessor = RANGE_PROPERTIES.get(prop)
    if accessor is None:
        raise ValidationError(f"Unknown range property: {prop}", field='prop')

    result = Range()
    for segment in segments:
        value = accessor(segment)
        if value is None:
            continue
        result.min = min(result.min, value)
        result.max = max(result.max, value)
        result.exists = True

    if result.exists:
        logger.debug(f"Range of {prop}: {result.min:.2f} - {result.max:.2f}")
    else:
        logger.info(f"No {prop} data in track")
    return result
