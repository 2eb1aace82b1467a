"""
Patient Records Dashboard - Streamlit Interface
Search, inspect and add patient records.
"""
from __future__ import annotations

import streamlit as st

from patient_dashboard.config import SETTINGS
from patient_dashboard.dashboard import DashboardState
from patient_dashboard.logging_conf import setup_logging
from patient_dashboard.records.loader import PatientSourceClient
from patient_dashboard.records.schemas import PatientRecord
from patient_dashboard.ui.formatting import card_subtitle, detail_rows, initials

# ═══════════════════════════════════════════════════════════════════
# Configuration
# ═══════════════════════════════════════════════════════════════════

st.set_page_config(
    page_title="Jarurat Care - Patient Records",
    page_icon="🏥",
    layout="wide",
)

FORM_FIELDS = ("name", "age", "contact", "email", "address", "notes")
GRID_COLUMNS = 3
LOAD_POLL_SECONDS = 0.5

DASHBOARD_CSS = """
<style>
    .dashboard-header {
        background: linear-gradient(135deg, #1a365d 0%, #2c5282 50%, #2b6cb0 100%);
        padding: 1.5rem 2rem;
        border-radius: 12px;
        margin-bottom: 1.5rem;
    }

    .dashboard-header h1 {
        color: white;
        margin: 0;
        font-weight: 600;
    }

    .dashboard-header p {
        color: #bee3f8;
        margin: 0.5rem 0 0 0;
    }

    .patient-avatar {
        display: inline-flex;
        width: 44px;
        height: 44px;
        border-radius: 50%;
        background: #2c5282;
        color: white;
        font-weight: 600;
        align-items: center;
        justify-content: center;
    }
</style>
"""


# ═══════════════════════════════════════════════════════════════════
# State
# ═══════════════════════════════════════════════════════════════════

def get_dashboard() -> DashboardState:
    """One state container per browser session; the load starts on first run
    and runs in the background so search and the form stay usable."""
    if "dashboard" not in st.session_state:
        setup_logging(SETTINGS.log_level)
        st.session_state["dashboard"] = DashboardState()
    dashboard: DashboardState = st.session_state["dashboard"]
    dashboard.start_background_load(PatientSourceClient())
    return dashboard


@st.fragment(run_every=LOAD_POLL_SECONDS)
def watch_load(dashboard: DashboardState):
    """Rerun the page once the background load settles."""
    if dashboard.load_status.state != "loading":
        st.rerun()


def _form_key(field: str) -> str:
    return f"new_{field}"


def _reset_form_inputs() -> None:
    for field in FORM_FIELDS:
        st.session_state.pop(_form_key(field), None)
    st.session_state.pop("form_error", None)


# ═══════════════════════════════════════════════════════════════════
# Callbacks
# ═══════════════════════════════════════════════════════════════════

def on_search_change(dashboard: DashboardState) -> None:
    dashboard.set_query(st.session_state.get("search_query", ""))


def on_toggle_form(dashboard: DashboardState) -> None:
    dashboard.toggle_form()
    _reset_form_inputs()


def on_submit(dashboard: DashboardState) -> None:
    raw = {field: st.session_state.get(_form_key(field), "") for field in FORM_FIELDS}
    result = dashboard.submit_new_patient(raw)
    if not result.ok:
        st.session_state["form_error"] = result.message
        return
    _reset_form_inputs()
    st.session_state["search_query"] = ""


def on_view_details(dashboard: DashboardState, record: PatientRecord) -> None:
    dashboard.select(record)


def on_dismiss(dashboard: DashboardState) -> None:
    dashboard.dismiss()


# ═══════════════════════════════════════════════════════════════════
# UI Components
# ═══════════════════════════════════════════════════════════════════

def render_header():
    st.markdown(DASHBOARD_CSS, unsafe_allow_html=True)
    st.markdown("""
    <div class="dashboard-header">
        <h1>🏥 Jarurat Care</h1>
        <p>Patient Records Dashboard</p>
    </div>
    """, unsafe_allow_html=True)


def render_controls(dashboard: DashboardState):
    """Search box and the add-patient toggle."""
    search_col, toggle_col = st.columns([4, 1])
    with search_col:
        st.text_input(
            "Search",
            placeholder="Search patients by name...",
            key="search_query",
            on_change=on_search_change,
            args=(dashboard,),
            label_visibility="collapsed",
        )
    with toggle_col:
        st.button(
            "Cancel" if dashboard.form_open else "+ Add New Patient",
            key="toggle_form",
            on_click=on_toggle_form,
            args=(dashboard,),
            use_container_width=True,
        )


def render_add_form(dashboard: DashboardState):
    if not dashboard.form_open:
        return

    with st.form("add_patient_form", clear_on_submit=False):
        col1, col2 = st.columns(2)
        with col1:
            st.text_input("Full Name *", key=_form_key("name"))
            st.text_input("Contact Number", key=_form_key("contact"))
            st.text_input("Address", key=_form_key("address"))
        with col2:
            st.text_input("Age", key=_form_key("age"))
            st.text_input("Email Address", key=_form_key("email"))
        st.text_area("Medical Notes", key=_form_key("notes"), height=90)
        st.form_submit_button("Add Patient", on_click=on_submit, args=(dashboard,))

    error = st.session_state.get("form_error")
    if error:
        st.error(error)


def render_status(dashboard: DashboardState):
    message = dashboard.status_message()
    if message is None:
        return
    if dashboard.load_status.failed:
        st.error(message)
    elif dashboard.load_status.state == "loading":
        st.info(message)
    else:
        st.caption(message)


def render_patient_card(dashboard: DashboardState, record: PatientRecord):
    with st.container(border=True):
        avatar_col, info_col = st.columns([1, 4])
        with avatar_col:
            st.markdown(
                f'<div class="patient-avatar">{initials(record.name)}</div>',
                unsafe_allow_html=True,
            )
        with info_col:
            st.markdown(f"**{record.name}**")
            st.caption(card_subtitle(record))
        st.button(
            "View Details",
            key=f"view_{record.id}",
            on_click=on_view_details,
            args=(dashboard, record),
            use_container_width=True,
        )


def render_patient_grid(dashboard: DashboardState):
    patients = dashboard.visible
    cols = st.columns(GRID_COLUMNS)
    for i, record in enumerate(patients):
        with cols[i % GRID_COLUMNS]:
            render_patient_card(dashboard, record)


def render_detail_panel(dashboard: DashboardState):
    """Detail view for the selected patient; read-only."""
    record = dashboard.selected
    if record is None:
        st.caption("Select a patient to view details.")
        return

    header_col, close_col = st.columns([5, 1])
    with header_col:
        st.markdown(f"### {record.name}")
    with close_col:
        st.button("×", key="close_details", on_click=on_dismiss, args=(dashboard,))

    for label, value in detail_rows(record):
        st.markdown(f"**{label}:** {value}")


# ═══════════════════════════════════════════════════════════════════
# Main Application
# ═══════════════════════════════════════════════════════════════════

def main():
    """Main application entry point."""
    dashboard = get_dashboard()

    render_header()

    st.markdown("### Patient Management")
    render_controls(dashboard)
    render_add_form(dashboard)
    render_status(dashboard)
    if dashboard.load_status.state == "loading":
        watch_load(dashboard)

    st.markdown("---")

    grid_col, detail_col = st.columns([3, 1])
    with grid_col:
        render_patient_grid(dashboard)
    with detail_col:
        render_detail_panel(dashboard)

    # Footer
    st.markdown("---")
    st.caption("© 2025 Jarurat Care - Patient Records Dashboard")


if __name__ == "__main__":
    main()
