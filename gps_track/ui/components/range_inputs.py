"""
Range input UI components.

This module contains the speed and heart rate range fields shown in the sidebar.
"""

import streamlit as st
import logging
from typing import Optional

from gps_track.config.settings import (
    DEFAULT_MIN_SPEED,
    DEFAULT_MAX_SPEED,
    DEFAULT_MIN_HEART_RATE,
    DEFAULT_MAX_HEART_RATE,
    DEFAULT_MIN_WIDTH,
    DEFAULT_MAX_WIDTH,
    SLOW_COLOR,
    MID_COLOR,
    FAST_COLOR,
)
from gps_track.core.models.track import TrackSession
from gps_track.services.range_controller import RangeState
from gps_track.ui import callbacks
from gps_track.utils.state_manager import (
    StateManager,
    TrackStateManager,
    SPEED_MIN_KEY,
    SPEED_MAX_KEY,
    HEART_RATE_MIN_KEY,
    HEART_RATE_MAX_KEY,
    WIDTH_MIN_KEY,
    WIDTH_MAX_KEY,
)

logger = logging.getLogger(__name__)


def speed_range_inputs(session: Optional[TrackSession]) -> None:
    """
    Speed min/max fields driving the color ramp.

    Args:
        session: Loaded track session, or None before the first load
    """
    st.subheader("Speed (km/h)")
    st.markdown(
        f'<div style="height: 10px; border-radius: 4px; margin-bottom: 8px; '
        f'background: linear-gradient(to right, {SLOW_COLOR}, {MID_COLOR}, {FAST_COLOR});"></div>',
        unsafe_allow_html=True
    )
    disabled = session is None
    for key, default in ((SPEED_MIN_KEY, DEFAULT_MIN_SPEED), (SPEED_MAX_KEY, DEFAULT_MAX_SPEED)):
        if not StateManager.has(key):
            StateManager.set(key, float(default))
    col1, col2 = st.columns(2)
    with col1:
        st.number_input(
            "Speed Min",
            step=1.0,
            key=SPEED_MIN_KEY,
            on_change=callbacks.on_speed_min_change,
            disabled=disabled,
        )
    with col2:
        st.number_input(
            "Speed Max",
            step=1.0,
            key=SPEED_MAX_KEY,
            on_change=callbacks.on_speed_max_change,
            disabled=disabled,
        )

    controller = TrackStateManager.get_service().controller
    if controller is not None and controller.speed_state is RangeState.INVALID_ORDERING:
        st.warning("Speed max is below min, colors are unchanged until this is fixed.")


def heart_rate_range_inputs(session: Optional[TrackSession]) -> None:
    """
    Heart rate min/max and width fields driving the width ramp.

    Hidden when the track has no heart rate data.

    Args:
        session: Loaded track session
    """
    if session is None or not session.has_heart_rate:
        return

    defaults = (
        (HEART_RATE_MIN_KEY, DEFAULT_MIN_HEART_RATE),
        (HEART_RATE_MAX_KEY, DEFAULT_MAX_HEART_RATE),
        (WIDTH_MIN_KEY, DEFAULT_MIN_WIDTH),
        (WIDTH_MAX_KEY, DEFAULT_MAX_WIDTH),
    )
    for key, default in defaults:
        if not StateManager.has(key):
            StateManager.set(key, float(default))

    st.subheader("Heart Rate (bpm)")
    col1, col2 = st.columns(2)
    with col1:
        st.number_input("HeartRate Min", step=1.0, key=HEART_RATE_MIN_KEY,
                        on_change=callbacks.on_heart_rate_min_change)
        st.number_input("Width", min_value=0.0, step=1.0, key=WIDTH_MIN_KEY,
                        on_change=callbacks.on_width_min_change)
    with col2:
        st.number_input("HeartRate Max", step=1.0, key=HEART_RATE_MAX_KEY,
                        on_change=callbacks.on_heart_rate_max_change)
        st.number_input("Width", min_value=0.0, step=1.0, key=WIDTH_MAX_KEY,
                        on_change=callbacks.on_width_max_change)

    controller = TrackStateManager.get_service().controller
    if controller is not None and controller.heart_rate_state is RangeState.INVALID_ORDERING:
        st.warning("Heart rate max is below min, widths are unchanged until this is fixed.")
