"""
GPS Track Visualizer

Main entry point for the Streamlit application.
"""

import streamlit as st
import logging

# Configure logging
from gps_track.config.settings import APP_DESCRIPTION, APP_NAME, LOGGING_CONFIG, PAGE_CONFIG

logging.basicConfig(
    level=LOGGING_CONFIG["level"],
    format=LOGGING_CONFIG["format"],
    handlers=LOGGING_CONFIG["handlers"]
)
logger = logging.getLogger(__name__)

# Import page modules
from gps_track.ui.pages.track_viewer import display_page

def main():
    """Main application entry point"""
    st.set_page_config(
        layout=PAGE_CONFIG["layout"],
        page_title=PAGE_CONFIG["page_title"],
        page_icon=PAGE_CONFIG["page_icon"],
        initial_sidebar_state=PAGE_CONFIG["initial_sidebar_state"],
        menu_items=PAGE_CONFIG["menu_items"]
    )

    st.title(f"⌚ {APP_NAME}")
    st.caption(APP_DESCRIPTION)

    display_page()

    logger.info("App rendered")

if __name__ == "__main__":
    main()
