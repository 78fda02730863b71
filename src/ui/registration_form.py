"""Registration form UI component."""
from typing import Dict, Sequence

import streamlit as st

from src.app_context import AppContext
from src.ui.html_utils import section_header_html

FORM_ID_KEY = "registration_form_id"
FEEDBACK_KEY = "registration_feedback"


def _field_keys(form_id: int) -> Dict[str, str]:
    """Widget keys for one generation of the form; a new id gives empty inputs."""
    return {
        name: f"registration_{name}_{form_id}"
        for name in ("name", "email", "contact", "event", "notes")
    }


def event_choices(events: Sequence[str]) -> list:
    """Options for the event select box; the empty entry forces a choice."""
    return [""] + list(events)


def event_choice_label(value: str) -> str:
    """Display text for an event option."""
    return value or "-- Select an event --"


def _show_feedback() -> None:
    feedback = st.session_state.pop(FEEDBACK_KEY, None)
    if feedback:
        level, message = feedback
        if level == "success":
            st.success(f"✅ {message}")
        else:
            st.error(f"❌ {message}")


def render_registration_form(context: AppContext) -> None:
    """Render the participant signup form and handle submission."""
    if FORM_ID_KEY not in st.session_state:
        st.session_state[FORM_ID_KEY] = 0

    keys = _field_keys(st.session_state[FORM_ID_KEY])

    st.markdown(
        section_header_html("📝 Event Registration", "Fill in your details to reserve a spot."),
        unsafe_allow_html=True,
    )

    _show_feedback()

    with st.form("registration_form", clear_on_submit=False):
        st.text_input("Full Name*", key=keys["name"], placeholder="Jane Doe")
        st.text_input("Email Address*", key=keys["email"], placeholder="jane@example.com")
        st.text_input("Contact Number*", key=keys["contact"], placeholder="+1 555 0100")
        st.selectbox(
            "Select Event*",
            options=event_choices(context.settings.events),
            format_func=event_choice_label,
            key=keys["event"],
        )
        st.text_area("Additional Notes", key=keys["notes"], placeholder="Dietary requirements, questions...")

        submit = st.form_submit_button("Register Now", type="primary", use_container_width=True)

    if not submit:
        return

    success, message = context.commands.register(
        name=st.session_state.get(keys["name"], ""),
        email=st.session_state.get(keys["email"], ""),
        contact=st.session_state.get(keys["contact"], ""),
        event=st.session_state.get(keys["event"], ""),
        notes=st.session_state.get(keys["notes"], ""),
    )

    if success:
        # Fresh widget keys clear the inputs; failed submissions keep them
        st.session_state[FORM_ID_KEY] += 1
        st.session_state[FEEDBACK_KEY] = ("success", message)
        st.rerun()
    else:
        st.error(f"❌ {message}")
