"""
Map hosts the track renderer draws on.

A map host keeps GeoJSON sources and line layers by id, in the manner of a
MapLibre map. FoliumMapHost keeps them in memory and renders them to a
folium map for display in Streamlit or export to HTML.
"""

import copy
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import folium

from gps_track.config.settings import MapConfig, StyleConfig
from gps_track.core.style import StyleExpression
from gps_track.utils.errors import MapHostError

logger = logging.getLogger(__name__)


class MapHost(ABC):
    """Source and layer API consumed by the track renderer."""

    @abstractmethod
    def add_source(self, source_id: str, source: Dict[str, Any]) -> None:
        """Add a data source."""

    @abstractmethod
    def add_layer(self, layer: Dict[str, Any]) -> None:
        """Add a style layer referencing a source."""

    @abstractmethod
    def remove_layer(self, layer_id: str) -> None:
        """Remove a layer."""

    @abstractmethod
    def remove_source(self, source_id: str) -> None:
        """Remove a source."""

    @abstractmethod
    def get_layer(self, layer_id: str) -> Optional[Dict[str, Any]]:
        """Get a layer or None."""

    @abstractmethod
    def get_source(self, source_id: str) -> Optional[Dict[str, Any]]:
        """Get a source or None."""

    @abstractmethod
    def set_paint_property(self, layer_id: str, name: str, value: Any) -> None:
        """Replace one paint property of a layer."""

    @abstractmethod
    def fit_bounds(self, bounds: List[List[float]], padding: int = 0, duration: int = 0) -> None:
        """Move the camera to show [[min_lon, min_lat], [max_lon, max_lat]]."""


class FoliumMapHost(MapHost):
    """
    In-memory map host rendered with folium.

    Sources and layers behave like those of a MapLibre map: adding an id
    twice or removing an unknown id raises MapHostError.
    """

    def __init__(
        self,
        center: tuple = MapConfig.CENTER,
        zoom: int = MapConfig.ZOOM,
        tiles: str = MapConfig.TILES
    ):
        self.center = center
        self.zoom = zoom
        self.tiles = tiles
        self.sources: Dict[str, Dict[str, Any]] = {}
        self.layers: Dict[str, Dict[str, Any]] = {}
        self.bounds: Optional[List[List[float]]] = None
        self.camera: Dict[str, Any] = {}

    def add_source(self, source_id: str, source: Dict[str, Any]) -> None:
        if source_id in self.sources:
            raise MapHostError("There is already a source with this ID", source_id)
        self.sources[source_id] = source

    def add_layer(self, layer: Dict[str, Any]) -> None:
        layer_id = layer.get('id')
        if layer_id in self.layers:
            raise MapHostError("Layer with this ID already exists", layer_id)
        if layer.get('source') not in self.sources:
            raise MapHostError("Layer references a missing source", layer.get('source'))
        self.layers[layer_id] = copy.deepcopy(layer)

    def remove_layer(self, layer_id: str) -> None:
        if layer_id not in self.layers:
            raise MapHostError("Cannot remove non-existing layer", layer_id)
        del self.layers[layer_id]

    def remove_source(self, source_id: str) -> None:
        if source_id not in self.sources:
            raise MapHostError("There is no source with this ID", source_id)
        if any(layer.get('source') == source_id for layer in self.layers.values()):
            raise MapHostError("Source is in use by a layer", source_id)
        del self.sources[source_id]

    def get_layer(self, layer_id: str) -> Optional[Dict[str, Any]]:
        return self.layers.get(layer_id)

    def get_source(self, source_id: str) -> Optional[Dict[str, Any]]:
        return self.sources.get(source_id)

    def set_paint_property(self, layer_id: str, name: str, value: Any) -> None:
        if layer_id not in self.layers:
            raise MapHostError("Cannot style non-existing layer", layer_id)
        self.layers[layer_id].setdefault('paint', {})[name] = value

    def fit_bounds(self, bounds: List[List[float]], padding: int = 0, duration: int = 0) -> None:
        self.bounds = bounds
        self.camera = {'padding': padding, 'duration': duration}

    def to_folium(self) -> folium.Map:
        """
        Build a folium map with one polyline per line feature.

        Color and width of each polyline come from evaluating the layer's
        paint properties against the feature's properties.

        Returns:
            folium.Map: The rendered map
        """
        m = folium.Map(location=[self.center[1], self.center[0]], zoom_start=self.zoom, tiles=self.tiles)

        for layer in self.layers.values():
            if layer.get('type') != 'line':
                continue
            source = self.sources.get(layer.get('source'), {})
            features = source.get('data', {}).get('features', [])
            paint = layer.get('paint', {})
            color = _paint_evaluator(paint.get('line-color'), StyleConfig.MID_COLOR)
            width = _paint_evaluator(paint.get('line-width'), StyleConfig.LINE_WIDTH)

            for feature in features:
                properties = feature.get('properties') or {}
                locations = [[lat, lon] for lon, lat, *_ in feature['geometry']['coordinates']]
                folium.PolyLine(
                    locations,
                    color=color(properties),
                    weight=width(properties),
                    opacity=1.0,
                    line_cap='square' if layer.get('layout', {}).get('line-cap') == 'square' else 'round',
                    tooltip=_tooltip(properties),
                ).add_to(m)
            logger.debug(f"Rendered {len(features)} features of layer {layer.get('id')}")

        if self.bounds is not None:
            (min_lon, min_lat), (max_lon, max_lat) = self.bounds
            padding = self.camera.get('padding', 0)
            m.fit_bounds([[min_lat, min_lon], [max_lat, max_lon]], padding=(padding, padding))

        return m


def _paint_evaluator(value: Any, default: Any):
    if isinstance(value, list):
        expression = StyleExpression.from_expression(value)
        return lambda properties: expression.evaluate(properties, default)
    constant = default if value is None else value
    return lambda properties: constant


def _tooltip(properties: Dict[str, Any]) -> str:
    parts = []
    if properties.get('speed') is not None:
        parts.append(f"{properties['speed']:.1f} km/h")
    if properties.get('heartRate') is not None:
        parts.append(f"{properties['heartRate']:.0f} bpm")
    if properties.get('slope') is not None:
        parts.append(f"{properties['slope'] * 100:.1f}% slope")
    return ", ".join(parts)
