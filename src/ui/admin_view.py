"""Admin view UI component: listing, search, export, resend and delete."""
import logging
import traceback
from typing import Dict, List, Optional

import streamlit as st

from src.app_context import AppContext
from src.models.participant import Participant
from src.services.view_projector import AdminView
from src.ui.html_utils import section_header_html, stat_card_html

logger = logging.getLogger(__name__)

SEARCH_KEY = "admin_search"
EVENT_FILTER_KEY = "admin_event_filter"
EXPORT_KEY = "admin_export"
FEEDBACK_KEY = "admin_feedback"
DELETE_ID_KEY = "delete_participant_id"


def _show_admin_exception(error: Exception, context: str) -> None:
    """Display error details in UI and log full traceback."""
    logger.exception("Admin view error during %s", context)

    st.error(f"❌ {context} failed: {error}")
    with st.expander("🔍 Error details"):
        st.code("".join(traceback.format_exception(type(error), error, error.__traceback__)))


def session_state_downloader(content: str, filename: str) -> None:
    """Export collaborator: keep the CSV in session state for a download button."""
    st.session_state[EXPORT_KEY] = {"content": content, "filename": filename}


def participant_table_rows(participants: List[Participant]) -> List[Dict[str, object]]:
    """Rows for the participant table, in the order given."""
    return [
        {
            "ID": p.id,
            "Name": p.name,
            "Email": p.email,
            "Contact": p.contact,
            "Event": p.event,
            "Registration Date": p.registration_date,
            "Notes": p.notes or "-",
        }
        for p in participants
    ]


def event_filter_options(events: List[str]) -> List[str]:
    """"All Events" (empty value) followed by the known events."""
    return [""] + list(events)


def reset_stale_event_filter(selected: Optional[str], events: List[str]) -> str:
    """
    Keep the selected event filter only while that event still has registrations.

    Returns:
        The selected event, or "" (all events) once it has disappeared
    """
    if selected and selected in events:
        return selected
    return ""


def event_filter_label(value: str) -> str:
    """Display text for an event filter option."""
    return value or "All Events"


def participant_option_label(participant: Participant) -> str:
    """Display text for a participant in the management picker."""
    return f"#{participant.id} · {participant.name} · {participant.event}"


def _set_feedback(level: str, message: str) -> None:
    st.session_state[FEEDBACK_KEY] = (level, message)


def _show_feedback() -> None:
    feedback = st.session_state.pop(FEEDBACK_KEY, None)
    if not feedback:
        return

    level, message = feedback
    if level == "success":
        st.success(message)
    elif level == "error":
        st.error(message)
    elif level == "warning":
        st.warning(message)
    else:
        st.info(message)


def results_caption(view: AdminView) -> Optional[str]:
    """"Showing X of Y" while a search or event filter narrows the table."""
    if not view.filters_active:
        return None
    return f"Showing {len(view.rows)} of {view.total} registrations"


def _render_stats(view: AdminView) -> None:
    col1, col2 = st.columns(2, gap="small")
    with col1:
        st.markdown(stat_card_html("Total Registrations", view.stats.total_registrations), unsafe_allow_html=True)
    with col2:
        st.markdown(stat_card_html("Events", view.stats.unique_events), unsafe_allow_html=True)


def export_for_filters(export: Optional[Dict[str, object]], search_term: str, event_name: str) -> Optional[Dict[str, object]]:
    """
    Return the prepared export only if it was built for the current filters.

    A CSV prepared before the search box or event filter changed no
    longer matches what the table shows, so it is discarded.
    """
    if not export or export.get("filters") != (search_term, event_name):
        return None
    return export


def _render_export(context: AppContext, search_term: str, event_name: str) -> None:
    if st.button("📥 Export CSV", key="admin_export_button"):
        st.session_state.pop(EXPORT_KEY, None)
        success, message = context.commands.export(search_term, event_name)
        if success and EXPORT_KEY in st.session_state:
            st.session_state[EXPORT_KEY]["filters"] = (search_term, event_name)
        elif not success:
            st.warning(message)

    export = export_for_filters(st.session_state.get(EXPORT_KEY), search_term, event_name)
    if export is None:
        st.session_state.pop(EXPORT_KEY, None)
        return

    st.download_button(
        f"💾 Download {export['filename']}",
        data=export["content"].encode("utf-8"),
        file_name=export["filename"],
        mime="text/csv",
        key="admin_download_csv",
    )


def _render_delete_confirmation(context: AppContext) -> None:
    """Ask before deleting; the registration is gone for good once confirmed."""
    participant_id = st.session_state.get(DELETE_ID_KEY)
    if participant_id is None:
        return

    participant = context.registry.find(participant_id)
    if participant is None:
        st.session_state.pop(DELETE_ID_KEY, None)
        return

    st.error("⚠️ Are you sure you want to delete this registration?")
    st.markdown(f"**{participant.name}** · {participant.email}")
    st.caption(f"{participant.event} · {participant.registration_date}")

    confirm_col, cancel_col = st.columns(2, gap="small")
    with confirm_col:
        confirm = st.button("✅ Delete", type="primary", key=f"confirm_delete_{participant_id}")
    with cancel_col:
        cancel = st.button("Cancel", key=f"cancel_delete_{participant_id}")

    if confirm or cancel:
        success, message = context.commands.delete(participant_id, confirmed=confirm)
        st.session_state.pop(DELETE_ID_KEY, None)
        st.session_state.pop(EXPORT_KEY, None)
        _set_feedback("success" if success else "info", message)
        st.rerun()


def _render_manage(context: AppContext, rows: List[Participant]) -> None:
    st.markdown("#### Manage registration")

    by_id = {p.id: p for p in rows}
    if st.session_state.get("admin_selected_participant") not in by_id:
        st.session_state.pop("admin_selected_participant", None)

    selected_id = st.selectbox(
        "Participant",
        options=list(by_id.keys()),
        format_func=lambda pid: participant_option_label(by_id[pid]),
        key="admin_selected_participant",
    )

    resend_col, delete_col = st.columns(2, gap="small")
    with resend_col:
        if st.button("✉️ Resend confirmation", key="admin_resend"):
            success, message = context.commands.resend(selected_id)
            if success:
                st.success(message)
    with delete_col:
        if st.button("🗑️ Delete", key="admin_delete"):
            st.session_state[DELETE_ID_KEY] = selected_id

    _render_delete_confirmation(context)


def render_admin_view(context: AppContext) -> None:
    """Render the admin listing and its actions."""
    try:
        st.markdown(section_header_html("📊 Registered Participants"), unsafe_allow_html=True)

        _show_feedback()

        # Other sessions may have registered or deleted since the last run
        context.registry.refresh()

        event_options = context.commands.filter().event_options

        # Must happen before the select box is built
        if EVENT_FILTER_KEY in st.session_state:
            st.session_state[EVENT_FILTER_KEY] = reset_stale_event_filter(
                st.session_state[EVENT_FILTER_KEY], event_options
            )

        search_col, filter_col = st.columns([2, 1], gap="small")
        with search_col:
            search_term = st.text_input(
                "Search",
                key=SEARCH_KEY,
                placeholder="Search by name, email or event",
            )
        with filter_col:
            event_name = st.selectbox(
                "Event",
                options=event_filter_options(event_options),
                format_func=event_filter_label,
                key=EVENT_FILTER_KEY,
            )

        view = context.commands.filter(search_term or "", event_name or "")

        _render_stats(view)
        _render_export(context, view.search_term, view.event_name)

        if view.total == 0:
            st.info("📝 No registrations yet")
            return

        if view.no_results:
            st.info("🔍 No participants match your search")
            return

        caption = results_caption(view)
        if caption:
            st.caption(caption)

        st.dataframe(participant_table_rows(view.rows), hide_index=True, use_container_width=True)
        _render_manage(context, view.rows)
    except Exception as error:
        _show_admin_exception(error, "Loading admin view")
