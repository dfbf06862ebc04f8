"""
Track rendering on a map host.

The renderer owns one logical track slot on the map: a GeoJSON source and
the line layer drawing it.
"""

import logging
from typing import Any, Dict, Optional

from gps_track.config.settings import MapConfig, StyleConfig
from gps_track.core.map_host import MapHost
from gps_track.core.style import StyleExpression
from gps_track.utils.errors import AppError
from gps_track.utils.geo import bounds_to_corners, calculate_bounds, is_valid_coordinate

logger = logging.getLogger(__name__)


def is_feature_collection(data: Any) -> bool:
    """
    Check that data is a FeatureCollection of LineString features.

    Args:
        data: Candidate GeoJSON object

    Returns:
        bool: True if every feature has at least two valid coordinates
    """
    if not isinstance(data, dict) or data.get('type') != 'FeatureCollection':
        return False
    features = data.get('features')
    if not isinstance(features, list):
        return False
    for feature in features:
        if not isinstance(feature, dict):
            return False
        geometry = feature.get('geometry')
        if not isinstance(geometry, dict) or geometry.get('type') != 'LineString':
            return False
        coordinates = geometry.get('coordinates')
        if not isinstance(coordinates, list) or len(coordinates) < 2:
            return False
        if not all(is_valid_coordinate(coordinate) for coordinate in coordinates):
            return False
    return True


class TrackRenderer:
    """
    Draws a track on a map host and updates its style in place.
    """

    def __init__(
        self,
        map_host: MapHost,
        source_id: str = MapConfig.SOURCE_ID,
        layer_id: str = MapConfig.LAYER_ID,
        padding: int = MapConfig.PADDING,
        duration: int = MapConfig.DURATION
    ):
        self.map_host = map_host
        self.source_id = source_id
        self.layer_id = layer_id
        self.padding = padding
        self.duration = duration

    def create_layer(self, paint: Dict[str, Any]) -> Dict[str, Any]:
        """Create the line layer definition."""
        return {
            'id': self.layer_id,
            'type': 'line',
            'source': self.source_id,
            'layout': {
                'line-cap': StyleConfig.LINE_CAP,
            },
            'paint': dict(paint),
        }

    def remove(self) -> None:
        """Remove the track layer and source if present."""
        if self.map_host.get_layer(self.layer_id) is not None:
            self.map_host.remove_layer(self.layer_id)
        if self.map_host.get_source(self.source_id) is not None:
            self.map_host.remove_source(self.source_id)

    def render(self, feature_collection: Dict[str, Any], paint: Dict[str, Any]) -> bool:
        """
        Replace the rendered track and fit the camera to it.

        Invalid input is logged and leaves the current track in place. When the
        map host fails part way, the previous track is put back.

        Args:
            feature_collection: GeoJSON FeatureCollection of track segments
            paint: Paint properties for the line layer

        Returns:
            bool: True if the track was rendered
        """
        if not is_feature_collection(feature_collection):
            logger.error(
                "Invalid GeoJSON data. Expected a FeatureCollection but received: "
                f"{type(feature_collection).__name__}"
            )
            return False

        previous_source = self.map_host.get_source(self.source_id)
        previous_layer = self.map_host.get_layer(self.layer_id)
        features = feature_collection['features']
        try:
            self.remove()
            self.map_host.add_source(self.source_id, {
                'type': 'geojson',
                'data': feature_collection,
            })
            self.map_host.add_layer(self.create_layer(paint))
            if features:
                bounds = calculate_bounds(features)
                self.map_host.fit_bounds(bounds_to_corners(bounds), padding=self.padding, duration=self.duration)
        except AppError as e:
            e.log()
            self._restore(previous_source, previous_layer)
            return False
        except Exception as e:
            logger.error(f"Map host failed while rendering track: {e}")
            self._restore(previous_source, previous_layer)
            return False

        logger.info(f"Rendered track with {len(features)} segments")
        return True

    def _restore(self, source: Optional[Dict[str, Any]], layer: Optional[Dict[str, Any]]) -> None:
        """Put back the track that was shown before a failed render."""
        try:
            self.remove()
            if source is not None and layer is not None:
                self.map_host.add_source(self.source_id, source)
                self.map_host.add_layer(layer)
                logger.info("Restored the previous track")
        except Exception as e:
            logger.error(f"Could not restore the previous track: {e}")
            try:
                self.remove()
            except Exception as cleanup_error:
                logger.error(f"Could not clear the track from the map: {cleanup_error}")

    def update_style(self, name: str, expression: Optional[StyleExpression]) -> bool:
        """
        Replace one paint property of the rendered track without touching its geometry.

        Args:
            name: Paint property, 'line-color' or 'line-width'
            expression: New style expression

        Returns:
            bool: True if the layer exists and was updated
        """
        if expression is None or self.map_host.get_layer(self.layer_id) is None:
            return False
        try:
            self.map_host.set_paint_property(self.layer_id, name, expression.to_expression())
        except AppError as e:
            e.log()
            return False
        return True
