"""
Application settings and constants.

This module centralizes all configuration values and constants used throughout the application,
making it easier to maintain and modify application behavior.
"""

import os
import logging
from typing import Dict, Any

# App information
APP_NAME = "GPS Track Visualizer"
APP_VERSION = "0.1.0"
APP_DESCRIPTION = "Color your GPX tracks by speed and size them by heart rate"

# File paths
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Map source and layer identifiers
TRACK_SOURCE_ID = "gps-source"
TRACK_LAYER_ID = "gps-layer"

# Speed color ramp
SLOW_COLOR = "#FF0000"  # Red at the minimum speed
MID_COLOR = "#FFFF00"  # Yellow at the midpoint
FAST_COLOR = "#008000"  # Green at the maximum speed

# Heart rate width ramp (pixels)
DEFAULT_MIN_WIDTH = 3
DEFAULT_MAX_WIDTH = 15
DEFAULT_LINE_WIDTH = 3  # Used when the track has no heart rate data
DEFAULT_LINE_CAP = "square"

# Range defaults shown before a track is loaded
DEFAULT_MIN_SPEED = 0  # km/h
DEFAULT_MAX_SPEED = 20  # km/h
DEFAULT_MIN_HEART_RATE = 50  # bpm
DEFAULT_MAX_HEART_RATE = 200  # bpm

# Camera
FIT_BOUNDS_PADDING = 50  # Pixels on every side
FIT_BOUNDS_DURATION = 1000  # Milliseconds
DEFAULT_MAP_CENTER = (0.0, 0.0)
DEFAULT_MAP_ZOOM = 1
DEFAULT_MAP_TILES = "OpenStreetMap"

# File parameters
ACCEPTED_FILE_TYPES = ["gpx"]
DEFAULT_FILE_ENCODING = "utf-8"

# Logging configuration
LOGGING_CONFIG = {
    "level": logging.INFO,
    "format": '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    "handlers": [
        logging.StreamHandler(),
        logging.FileHandler(os.path.join(BASE_DIR, 'app.log'), delay=True)
    ]
}

# Streamlit page configuration
PAGE_CONFIG = {
    "page_title": "GPS Track Visualizer",
    "page_icon": "⌚",
    "layout": "wide",
    "initial_sidebar_state": "expanded",
    "menu_items": {
        "About": "GPS Track Visualizer - see where you were fast and where your heart was working hard."
    }
}


# =============== Configuration Classes ===============
# These classes provide typed access to configuration sections

class StyleConfig:
    """Configuration parameters for the track line style."""
    SLOW_COLOR = SLOW_COLOR
    MID_COLOR = MID_COLOR
    FAST_COLOR = FAST_COLOR
    MIN_WIDTH = DEFAULT_MIN_WIDTH
    MAX_WIDTH = DEFAULT_MAX_WIDTH
    LINE_WIDTH = DEFAULT_LINE_WIDTH
    LINE_CAP = DEFAULT_LINE_CAP

    @classmethod
    def as_dict(cls) -> Dict[str, Any]:
        """Get style configuration as a dictionary."""
        return {
            'slow_color': cls.SLOW_COLOR,
            'mid_color': cls.MID_COLOR,
            'fast_color': cls.FAST_COLOR,
            'min_width': cls.MIN_WIDTH,
            'max_width': cls.MAX_WIDTH,
            'line_width': cls.LINE_WIDTH,
            'line_cap': cls.LINE_CAP,
        }


class MapConfig:
    """Configuration parameters for the map host."""
    SOURCE_ID = TRACK_SOURCE_ID
    LAYER_ID = TRACK_LAYER_ID
    PADDING = FIT_BOUNDS_PADDING
    DURATION = FIT_BOUNDS_DURATION
    CENTER = DEFAULT_MAP_CENTER
    ZOOM = DEFAULT_MAP_ZOOM
    TILES = DEFAULT_MAP_TILES

    @classmethod
    def as_dict(cls) -> Dict[str, Any]:
        """Get map configuration as a dictionary."""
        return {
            'source_id': cls.SOURCE_ID,
            'layer_id': cls.LAYER_ID,
            'padding': cls.PADDING,
            'duration': cls.DURATION,
            'center': cls.CENTER,
            'zoom': cls.ZOOM,
            'tiles': cls.TILES,
        }
