"""
UI callback handlers for Streamlit components.

This module provides centralized callback functions for UI components,
separating event handling from business logic and UI rendering.
"""

import logging

from gps_track.utils.errors import AppError
from gps_track.utils.state_manager import (
    StateManager,
    TrackStateManager,
    UPLOAD_KEY,
    SPEED_MIN_KEY,
    SPEED_MAX_KEY,
    HEART_RATE_MIN_KEY,
    HEART_RATE_MAX_KEY,
    WIDTH_MIN_KEY,
    WIDTH_MAX_KEY,
)

logger = logging.getLogger(__name__)

# File Callbacks

def on_file_change() -> None:
    """
    Callback for a new file in the uploader.

    Read and format failures are kept for display and leave the current
    track as it was.
    """
    uploaded_file = StateManager.get(UPLOAD_KEY)
    if uploaded_file is None:
        return

    service = TrackStateManager.get_service()
    try:
        session = service.load_file(uploaded_file, file_name=uploaded_file.name)
    except AppError as e:
        e.log()
        TrackStateManager.set_load_error(e.message)
        return

    TrackStateManager.set_load_error(None)
    if session is not None:
        TrackStateManager.sync_range_fields(session)

# Range Field Callbacks

def _controller():
    return TrackStateManager.get_service().controller


def on_speed_min_change() -> None:
    controller = _controller()
    if controller is not None:
        controller.set_speed_min(StateManager.get(SPEED_MIN_KEY))


def on_speed_max_change() -> None:
    controller = _controller()
    if controller is not None:
        controller.set_speed_max(StateManager.get(SPEED_MAX_KEY))


def on_heart_rate_min_change() -> None:
    controller = _controller()
    if controller is not None:
        controller.set_heart_rate_min(StateManager.get(HEART_RATE_MIN_KEY))


def on_heart_rate_max_change() -> None:
    controller = _controller()
    if controller is not None:
        controller.set_heart_rate_max(StateManager.get(HEART_RATE_MAX_KEY))


def on_width_min_change() -> None:
    controller = _controller()
    if controller is not None:
        controller.set_width_min(StateManager.get(WIDTH_MIN_KEY))


def on_width_max_change() -> None:
    controller = _controller()
    if controller is not None:
        controller.set_width_max(StateManager.get(WIDTH_MAX_KEY))
