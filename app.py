"""
Race Registration
Streamlit entry point for the race registration flow.
"""
import logging

import streamlit as st

from src.services.settings_service import get_settings
from src.ui.checkout_page import render_checkout_page
from src.ui.registration_page import render_registration_page

logger = logging.getLogger(__name__)


st.set_page_config(
    page_title="Race Registration",
    page_icon="🏃",
    layout="wide",
    initial_sidebar_state="collapsed"
)


def configure_logging():
    """Set root log level from settings."""
    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def initialize_session_state():
    """Initialize session state defaults."""
    if "current_page" not in st.session_state:
        st.session_state.current_page = "register"


def apply_custom_css():
    """Apply custom CSS."""
    st.markdown("""
        <style>
        .stApp {
            background: linear-gradient(135deg, #eff6ff 0%, #e0e7ff 100%);
        }

        #MainMenu {visibility: hidden;}
        footer {visibility: hidden;}

        .stButton > button {
            border-radius: 12px;
            font-weight: 600;
        }

        .stButton > button[kind="primary"] {
            background: #1e3a8a;
            color: white;
        }

        .stButton > button[kind="primary"]:hover {
            background: #1e40af;
        }
        </style>
    """, unsafe_allow_html=True)


def render_current_page():
    """Render the page selected in session state."""
    try:
        if st.session_state.current_page == "register":
            render_registration_page()

        elif st.session_state.current_page == "checkout":
            render_checkout_page()

        else:
            st.error(f"Unknown page: {st.session_state.current_page}")
            if st.button("Back to Registration"):
                st.session_state.current_page = "register"
                st.rerun()

    except Exception as e:
        logger.exception("Unhandled exception while rendering page")
        st.error("Something went wrong, please try again later.")

        with st.expander("🔍 Error details"):
            st.code(str(e))

        if st.button("Back to Registration"):
            st.session_state.current_page = "register"
            st.rerun()


def main():
    """Application entry point."""
    try:
        configure_logging()
        initialize_session_state()
        apply_custom_css()
        render_current_page()
    except Exception as e:
        logger.exception("Unhandled exception during app execution")
        st.error("The application hit an error, please reload the page.")
        st.code(str(e))

        if st.button("🔄 Reload"):
            st.session_state.clear()
            st.rerun()


if __name__ == "__main__":
    main()
