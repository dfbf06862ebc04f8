"""
State management utilities for Streamlit applications.

This module provides centralized state management functionality,
abstracting away the details of Streamlit's session_state.
"""

import streamlit as st
from typing import Any, Optional, TypeVar
import logging

from gps_track.core.models.track import TrackSession
from gps_track.services.track_service import TrackService

logger = logging.getLogger(__name__)

T = TypeVar('T')

# Widget keys of the range fields
SPEED_MIN_KEY = 'speed_min'
SPEED_MAX_KEY = 'speed_max'
HEART_RATE_MIN_KEY = 'heart_rate_min'
HEART_RATE_MAX_KEY = 'heart_rate_max'
WIDTH_MIN_KEY = 'width_min'
WIDTH_MAX_KEY = 'width_max'
UPLOAD_KEY = 'track_file'


class StateManager:
    """
    Centralized manager for Streamlit session state.

    This class provides a consistent interface for working with Streamlit's
    session state, including type hints and default values.
    """

    @staticmethod
    def get(key: str, default_value: T = None) -> T:
        """
        Get a value from session state with a default if not present.

        Args:
            key: The key to retrieve from session state
            default_value: Default value to return if key is not in session state

        Returns:
            The value from session state, or the default value
        """
        return st.session_state.get(key, default_value)

    @staticmethod
    def set(key: str, value: Any) -> None:
        """
        Set a value in session state.

        Args:
            key: The key to set in session state
            value: The value to store
        """
        st.session_state[key] = value

    @staticmethod
    def has(key: str) -> bool:
        """Check if a key exists in session state."""
        return key in st.session_state

    @staticmethod
    def delete(key: str) -> None:
        """Delete a key from session state if it exists."""
        if key in st.session_state:
            del st.session_state[key]


class TrackStateManager:
    """
    Specialized state manager for the loaded track.

    The TrackService lives in session state so the map host and the current
    session survive Streamlit reruns.
    """

    @staticmethod
    def get_service() -> TrackService:
        """Get the track service, creating it on first use."""
        service = StateManager.get('track_service')
        if service is None:
            service = TrackService()
            StateManager.set('track_service', service)
            logger.debug("Created track service")
        return service

    @staticmethod
    def get_session() -> Optional[TrackSession]:
        """Get the session of the loaded track, if any."""
        return TrackStateManager.get_service().session

    @staticmethod
    def sync_range_fields(session: TrackSession) -> None:
        """
        Write a new session's ranges into the range field widgets.

        Args:
            session: Newly loaded session
        """
        StateManager.set(SPEED_MIN_KEY, float(session.speed_range.min) if session.speed_range.exists else None)
        StateManager.set(SPEED_MAX_KEY, float(session.speed_range.max) if session.speed_range.exists else None)
        if session.has_heart_rate:
            StateManager.set(HEART_RATE_MIN_KEY, float(session.heart_rate_range.min))
            StateManager.set(HEART_RATE_MAX_KEY, float(session.heart_rate_range.max))
            StateManager.set(WIDTH_MIN_KEY, float(session.min_width))
            StateManager.set(WIDTH_MAX_KEY, float(session.max_width))
        else:
            for key in (HEART_RATE_MIN_KEY, HEART_RATE_MAX_KEY, WIDTH_MIN_KEY, WIDTH_MAX_KEY):
                StateManager.delete(key)

    @staticmethod
    def get_load_error() -> Optional[str]:
        return StateManager.get('load_error')

    @staticmethod
    def set_load_error(message: Optional[str]) -> None:
        StateManager.set('load_error', message)
