"""
Track viewer page for the GPS Track Visualizer app.

This module contains the UI for loading a track and tuning its style.
"""

import streamlit as st
import logging

from gps_track.config.settings import ACCEPTED_FILE_TYPES
from gps_track.core.models.track import segments_dataframe
from gps_track.ui import callbacks
from gps_track.ui.components.range_inputs import heart_rate_range_inputs, speed_range_inputs
from gps_track.ui.components.visualization import display_track_map, display_track_summary
from gps_track.utils.state_manager import TrackStateManager, UPLOAD_KEY

logger = logging.getLogger(__name__)


def display_page():
    """Display the track viewer page."""
    service = TrackStateManager.get_service()

    with st.sidebar:
        st.header("GPS Visualizer")
        st.file_uploader(
            "Upload a GPX file",
            type=ACCEPTED_FILE_TYPES,
            key=UPLOAD_KEY,
            on_change=callbacks.on_file_change,
        )

        load_error = TrackStateManager.get_load_error()
        if load_error:
            st.error(load_error)

        session = service.session
        speed_range_inputs(session)
        heart_rate_range_inputs(session)

    if session is None:
        st.info("Upload a GPX file to see your track colored by speed.")
        display_track_map(service.map_host)
        return

    st.subheader(session.name)
    display_track_summary(session)
    display_track_map(service.map_host)

    with st.expander("Segments"):
        if session.segments:
            st.dataframe(segments_dataframe(session.segments), use_container_width=True)
        else:
            st.write("This track has no segments.")
