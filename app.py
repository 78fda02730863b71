"""
Event Registration Manager
Single-page signup form with an admin view over the stored registrations.
"""
import logging

import streamlit as st

from src.app_context import create_app_context
from src.ui.admin_view import render_admin_view, session_state_downloader
from src.ui.registration_form import render_registration_form
from src.utils.config import load_settings

logger = logging.getLogger(__name__)


st.set_page_config(
    page_title="Event Registration",
    page_icon="🎟️",
    layout="wide",
    initial_sidebar_state="collapsed"
)


def configure_logging(level: str) -> None:
    """Send application logs (including simulated emails) to stderr."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def initialize_session_state():
    """Initialize session state defaults and the application context."""
    if "current_page" not in st.session_state:
        st.session_state.current_page = "register"

    # The registry is loaded once per browser session
    if "app_context" not in st.session_state:
        settings = load_settings()
        configure_logging(settings.log_level)
        st.session_state.app_context = create_app_context(
            settings,
            downloader=session_state_downloader,
        )


def apply_custom_css():
    """Apply custom CSS styles."""
    st.markdown("""
        <style>
        .stApp {
            background: linear-gradient(135deg, #0f0c29 0%, #1a1a2e 50%, #16213e 100%);
        }

        #MainMenu {visibility: hidden;}
        footer {visibility: hidden;}

        .stButton > button {
            border-radius: 12px;
            font-weight: 600;
            border: none;
        }

        .stButton > button[kind="primary"] {
            background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
            color: white;
        }

        .stTextInput > div > div > input,
        .stTextArea > div > div > textarea {
            background: #16213e;
            border: 1px solid #2d3748;
            border-radius: 8px;
            color: #f1f5f9;
        }

        .section-header {
            margin-bottom: 16px;
        }

        .section-subtitle {
            color: #94a3b8;
        }
        </style>
    """, unsafe_allow_html=True)


def render_navigation():
    """Render the Register / Admin switch."""
    nav_col1, nav_col2, _ = st.columns([1, 1, 3], gap="small")

    with nav_col1:
        if st.button("📝 Register", use_container_width=True, key="nav_register"):
            st.session_state.current_page = "register"

    with nav_col2:
        if st.button("📊 Admin", use_container_width=True, key="nav_admin"):
            st.session_state.current_page = "admin"


def render_current_page():
    """Render the page selected in session state."""
    context = st.session_state.app_context

    try:
        if st.session_state.current_page == "register":
            render_registration_form(context)

        elif st.session_state.current_page == "admin":
            render_admin_view(context)

        else:
            st.error(f"Unknown page: {st.session_state.current_page}")
            if st.button("Back to registration"):
                st.session_state.current_page = "register"
                st.rerun()

    except Exception as e:
        logger.exception("Unhandled exception while rendering page")
        st.error("Something went wrong, please try again later")

        with st.expander("🔍 Error details"):
            st.code(str(e))


def main():
    """Application entry point."""
    try:
        initialize_session_state()
        apply_custom_css()
        render_navigation()
        render_current_page()
    except Exception as e:
        logger.exception("Unhandled exception during app execution")
        st.error("The application failed to start, please reload the page")
        st.code(str(e))

        if st.button("🔄 Reload"):
            st.session_state.clear()
            st.rerun()


if __name__ == "__main__":
    main()
