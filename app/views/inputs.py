"""
Input View (Sidebar)
====================
Team import, station and period configuration, capacity overview and the
generate trigger.
"""
import uuid
from datetime import timedelta
from typing import List

import streamlit as st

from app.components.team_editor import render_availability_editor, render_team_editor, render_team_import
from app.state.session import SessionStateManager
from stationplan.io.csv_loader import merge_team
from stationplan.models.constraints import ScheduleConfig
from stationplan.models.person import Station
from stationplan.solver.capacity import analyze_capacity
from stationplan.solver.slots import CalendarError


def render_inputs(state: SessionStateManager):
    """Render the sidebar inputs and update state."""
    with st.sidebar:
        st.header("1. Team")
        imported = render_team_import()
        if imported:
            people, skipped = merge_team(state.people, imported)
            for message in skipped:
                st.warning(message)
            added = len(people) - len(state.people)
            if added:
                st.success(f"✅ {added} Personen hinzugefügt")
                state.people = people
                state.clear_results()

        if state.people:
            render_team_editor(state.people, on_change=_setter(state, "people"))

        st.divider()
        st.header("2. Stationen")
        _render_station_editor(state)

        st.divider()
        st.header("3. Zeitraum")
        _render_period(state)

        if state.people:
            dates = _period_dates(state.config)
            render_availability_editor(state.people, dates, on_change=_setter(state, "people"))

        st.divider()
        st.header("4. Planung")
        _render_capacity(state)

        st.number_input(
            "Seed (0 = zufällig)", min_value=0, step=1, key="config_seed",
            help="Gleicher Seed, gleiche Eingaben: gleicher Plan",
        )
        st.checkbox(
            "Auch bei zu kleinem Team planen", key="allow_understaffed",
            help="Plant so viele Stationen wie möglich und meldet Lücken",
        )
        if st.button("🚀 Plan erstellen", type="primary", disabled=not state.people):
            state.trigger_generate = True


def _setter(state: SessionStateManager, attr: str):
    def apply(value):
        setattr(state, attr, value)
        state.clear_results()
    return apply


def _render_station_editor(state: SessionStateManager):
    stations: List[Station] = state.stations
    updated = []
    for station in stations:
        col1, col2 = st.columns([3, 1])
        with col1:
            name = st.text_input(
                "Name", value=station.name, key=f"station_{station.id}_name",
                label_visibility="collapsed",
            )
        with col2:
            active = st.checkbox("Aktiv", value=station.active, key=f"station_{station.id}_active")
        updated.append(Station(id=station.id, name=name or station.name, active=active))

    new_name = st.text_input("Neue Station", key="station_new_name")
    if st.button("➕ Station hinzufügen") and new_name.strip():
        updated.append(Station(id=str(uuid.uuid4()), name=new_name.strip()))

    if [s.to_dict() for s in updated] != [s.to_dict() for s in stations]:
        state.stations = updated
        state.clear_results()


def _render_period(state: SessionStateManager):
    config = state.config
    col1, col2 = st.columns(2)
    with col1:
        start = st.date_input("Von", value=config.start_date, format="DD.MM.YYYY")
    with col2:
        end = st.date_input("Bis", value=config.end_date, format="DD.MM.YYYY")
    include_start_morning = st.checkbox(
        "Frühdienst am ersten Tag", value=config.include_start_morning,
    )
    include_end_evening = st.checkbox(
        "Spätdienst am letzten Tag", value=config.include_end_evening,
    )

    updated = ScheduleConfig(
        start_date=start,
        end_date=end,
        include_start_morning=include_start_morning,
        include_end_evening=include_end_evening,
    )
    for error in updated.validate():
        st.error(error)
    if updated.to_dict() != config.to_dict():
        state.config = updated
        state.clear_results()


def _period_dates(config: ScheduleConfig) -> List[str]:
    return [
        (config.start_date + timedelta(days=i)).isoformat()
        for i in range(config.days)
    ]


def _render_capacity(state: SessionStateManager):
    if not state.people:
        st.info("Bitte zuerst ein Team importieren.")
        return
    try:
        capacity = analyze_capacity(state.people, state.stations, state.config)
    except CalendarError as e:
        st.error(str(e))
        return

    col1, col2 = st.columns(2)
    col1.metric("Schichten", capacity.total_slots)
    col2.metric("Einsätze nötig", capacity.total_assignments_needed)
    st.caption(
        f"Pro Person {capacity.min_per_person}–{capacity.max_per_person} Einsätze "
        f"(max. möglich: {capacity.max_possible_assignments})"
    )
    if not capacity.is_feasible:
        st.warning(
            f"⚠️ Team zu klein: {capacity.deficit} Einsätze können nicht besetzt werden."
        )
