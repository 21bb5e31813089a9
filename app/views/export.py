"""
Export View
===========
Handles file downloads (CSV, Excel). Downloading the CSV ends the session:
all planning data is cleared afterwards.
"""
import io

import streamlit as st

from app.state.session import SessionStateManager
from stationplan.io.schedule_export import (
    export_filename,
    export_schedule_to_excel,
    schedule_to_csv,
)
from stationplan.models.person import active_stations


def render_downloads(state: SessionStateManager):
    """Render the download section."""
    result = state.result
    if result is None or not result.assignments:
        st.warning("Bitte zuerst einen Plan erstellen.")
        return

    people = state.people
    stations = active_stations(state.stations)

    st.subheader("📥 Downloads")
    col1, col2 = st.columns(2)

    with col1:
        st.download_button(
            "📥 CSV herunterladen",
            schedule_to_csv(result.assignments, people, stations),
            export_filename(result.assignments),
            "text/csv",
            on_click=state.clear_all,
            help="Nach dem Download werden alle Daten gelöscht",
        )

    with col2:
        xlsx_buffer = io.BytesIO()
        export_schedule_to_excel(result.assignments, people, stations, xlsx_buffer)
        st.download_button(
            "📥 Excel herunterladen",
            xlsx_buffer.getvalue(),
            export_filename(result.assignments).replace(".csv", ".xlsx"),
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        )
