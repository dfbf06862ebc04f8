"""
Data visualization components for the GPS Track Visualizer app.

This module contains functions for displaying the styled track map
and the track summary.
"""

import streamlit as st
import logging
from streamlit_folium import folium_static

from gps_track.core.map_host import FoliumMapHost
from gps_track.core.models.track import TrackSession

logger = logging.getLogger(__name__)


def display_track_map(map_host: FoliumMapHost, width: int = 900, height: int = 600) -> None:
    """
    Display the map host's current layers.

    Args:
        map_host: Map host holding the rendered track
        width: Map width in pixels
        height: Map height in pixels
    """
    try:
        folium_static(map_host.to_folium(), width=width, height=height)
    except Exception as e:
        logger.error(f"Error displaying track map: {e}")
        st.error(f"Error displaying map: {e}")


def display_track_summary(session: TrackSession) -> None:
    """
    Display summary metrics of the loaded track.

    Args:
        session: Loaded track session
    """
    summary = session.summary
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Distance", f"{summary.get('distance', 0):.2f} km")
    with col2:
        st.metric("Duration", str(summary.get('duration', '')).split('.')[0])
    with col3:
        st.metric("Avg Speed", f"{summary.get('avg_speed', 0):.1f} km/h",
                  help=f"Max {summary.get('max_speed', 0):.1f} km/h")
    with col4:
        st.metric("Elevation Gain", f"{summary.get('elevation_gain', 0):.0f} m",
                  help=f"Loss {summary.get('elevation_loss', 0):.0f} m")

    if summary.get('avg_heart_rate') is not None:
        st.caption(f"Heart rate: avg {summary['avg_heart_rate']:.0f} bpm, "
                   f"max {summary['max_heart_rate']:.0f} bpm")
    else:
        st.caption("No heart rate data in this track; the line has a constant width.")
