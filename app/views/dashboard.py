"""
Dashboard View
==============
Displays the generated plan: KPIs, diagnostics, calendar, person and
station views and the fairness analysis.
"""
import pandas as pd
import plotly.express as px
import streamlit as st

from app.state.session import SessionStateManager
from stationplan.io.schedule_export import build_schedule_matrix
from stationplan.models.person import active_stations
from stationplan.models.shift import SHIFTS
from stationplan.solver.stats import calculate_person_stats, stats_to_dataframe


def render_dashboard(state: SessionStateManager):
    """Render the results of the last generation run."""
    result = state.result
    if result is None:
        st.info("👋 Team importieren, Zeitraum wählen und Plan erstellen.")
        return

    _render_hero_kpis(state)
    _render_diagnostic_banner(state)

    if not result.assignments:
        return

    t1, t2, t3, t4 = st.tabs([
        "📅 Kalender",
        "👥 Personen",
        "📍 Stationen",
        "📈 Fairness",
    ])
    with t1:
        _render_calendar(state)
    with t2:
        _render_person_view(state)
    with t3:
        _render_station_view(state)
    with t4:
        _render_fairness(state)


def _render_hero_kpis(state: SessionStateManager):
    result = state.result
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Status", "✅ Vollständig" if result.success else "⚠️ Lücken")
    col2.metric("Einsätze", len(result.assignments))
    col3.metric("Fairness", f"{result.fairness.fairness_score:.0%}")
    col4.metric(
        "Einsätze/Person",
        f"{result.fairness.min_assignments}–{result.fairness.max_assignments}",
    )


def _render_diagnostic_banner(state: SessionStateManager):
    issues = state.result.issues
    if not issues:
        return
    fatal = [i for i in issues if i.is_fatal]
    if fatal:
        for issue in fatal:
            st.error(f"❌ {issue.message}")
        return
    with st.expander(f"⚠️ {len(issues)} Schichten nicht voll besetzt", expanded=False):
        for issue in issues:
            st.write(f"- {issue.message}")


def _render_calendar(state: SessionStateManager):
    result = state.result
    stations = active_stations(state.stations)
    matrix = build_schedule_matrix(result.assignments, state.people, stations)
    st.dataframe(matrix, hide_index=True, width="stretch")


def _render_person_view(state: SessionStateManager):
    result = state.result
    people = state.people
    names = {p.id: p.name for p in people}
    stations = {s.id: s.name for s in state.stations}

    person = st.selectbox("Person", people, format_func=lambda p: p.name)
    if person is None:
        return
    rows = [
        {
            "Datum": a.date,
            "Tag": a.weekday,
            "Schicht": a.shift.label,
            "Station": stations.get(a.station_id, a.station_id),
            "Mit": ", ".join(
                names.get(b.person_id, "?")
                for b in result.get_slot_assignments(a.date, a.shift, a.station_id)
                if b.person_id != a.person_id
            ),
        }
        for a in sorted(result.get_person_assignments(person.id), key=lambda a: (a.date, a.shift.order))
    ]
    st.dataframe(pd.DataFrame(rows), hide_index=True, width="stretch")


def _render_station_view(state: SessionStateManager):
    result = state.result
    stations = active_stations(state.stations)
    names = {p.id: p.name for p in state.people}

    station = st.selectbox("Station", stations, format_func=lambda s: s.name)
    if station is None:
        return
    rows = []
    for iso_date in sorted({a.date for a in result.assignments}):
        for shift in SHIFTS:
            staffed = result.get_slot_assignments(iso_date, shift, station.id)
            if not staffed:
                continue
            rows.append({
                "Datum": iso_date,
                "Schicht": shift.label,
                "Personen": ", ".join(names.get(a.person_id, "?") for a in staffed),
            })
    st.dataframe(pd.DataFrame(rows), hide_index=True, width="stretch")


def _render_fairness(state: SessionStateManager):
    result = state.result
    stations = active_stations(state.stations)
    stats = calculate_person_stats(result.assignments, state.people, stations)
    df = stats_to_dataframe(stats, stations)

    col1, col2 = st.columns(2)
    with col1:
        st.write("**Einsätze pro Person**")
        fig_bar = px.bar(
            df, x="Name", y=["Frühdienst", "Spätdienst"],
            color_discrete_sequence=["#DDEEFF", "#FFE4CC"],
        )
        fig_bar.update_layout(margin=dict(l=20, r=20, t=30, b=20), height=320, legend_title_text="")
        st.plotly_chart(fig_bar, width="stretch")

    with col2:
        st.write("**Einsätze pro Station**")
        per_station = result.fairness.assignments_per_station
        station_names = {s.id: s.name for s in stations}
        fig_pie = px.pie(
            values=list(per_station.values()),
            names=[station_names.get(sid, sid) for sid in per_station],
        )
        fig_pie.update_layout(margin=dict(l=20, r=20, t=30, b=20), height=320)
        st.plotly_chart(fig_pie, width="stretch")

    st.dataframe(df, hide_index=True, width="stretch")
    st.caption(
        f"Fairness-Score {result.fairness.fairness_score:.3f} "
        f"(Spanne {result.fairness.spread} Einsätze, {result.stats.get('passes', 0)} Durchläufe)"
    )
