"""Team editor UI components for Streamlit."""
import io
import uuid
from typing import Callable, List, Optional

import pandas as pd
import streamlit as st

from stationplan.io.csv_loader import load_team, team_to_csv
from stationplan.models.person import Person

AVAILABILITY_MODES = ["Immer verfügbar", "Nur an diesen Tagen", "Nicht an diesen Tagen"]


def team_editor_frame(team: List[Person]) -> pd.DataFrame:
    """Editable view of the team: name and shift exclusions."""
    return pd.DataFrame(
        [
            {
                "Name": p.name,
                "Kein Frühdienst": p.exclude_morning_shifts,
                "Kein Spätdienst": p.exclude_evening_shifts,
            }
            for p in team
        ],
        columns=["Name", "Kein Frühdienst", "Kein Spätdienst"],
    )


def apply_team_edits(team: List[Person], edited: pd.DataFrame) -> List[Person]:
    """
    Merge an edited frame back into Person objects.

    Rows keep the id and date availability of the person at the same
    position; new rows get a fresh id; rows without a name are dropped.
    """
    updated = []
    for idx, (_, row) in enumerate(edited.iterrows()):
        name = str(row.get("Name", "") or "").strip()
        if not name:
            continue
        old = team[idx] if idx < len(team) else None
        updated.append(Person(
            id=old.id if old else str(uuid.uuid4()),
            name=name,
            exclude_morning_shifts=bool(row.get("Kein Frühdienst", False)),
            exclude_evening_shifts=bool(row.get("Kein Spätdienst", False)),
            available_dates=old.available_dates if old else None,
            unavailable_dates=old.unavailable_dates if old else None,
        ))
    return updated


def render_team_editor(
    team: List[Person],
    on_change: Optional[Callable[[List[Person]], None]] = None,
    key_prefix: str = "team_editor",
) -> List[Person]:
    """
    Render an editable team table in Streamlit.

    Args:
        team: Current team list
        on_change: Callback when team changes
        key_prefix: Unique key prefix for Streamlit widgets

    Returns:
        Updated team list
    """
    st.subheader("👥 Team")

    edited_df = st.data_editor(
        team_editor_frame(team),
        column_config={
            "Name": st.column_config.TextColumn("Name", required=True),
            "Kein Frühdienst": st.column_config.CheckboxColumn("Kein Frühdienst", default=False),
            "Kein Spätdienst": st.column_config.CheckboxColumn("Kein Spätdienst", default=False),
        },
        num_rows="dynamic",
        key=f"{key_prefix}_editor",
        hide_index=True,
    )
    updated_team = apply_team_edits(team, edited_df)

    col1, col2 = st.columns(2)
    with col1:
        st.download_button(
            "📥 Team als CSV",
            data=team_to_csv(updated_team),
            file_name="team.csv",
            mime="text/csv",
            key=f"{key_prefix}_export",
        )
    with col2:
        st.metric("Personen", len(updated_team))

    if on_change and [p.to_dict() for p in updated_team] != [p.to_dict() for p in team]:
        on_change(updated_team)

    return updated_team


def render_availability_editor(
    team: List[Person],
    period_dates: List[str],
    on_change: Optional[Callable[[List[Person]], None]] = None,
    key_prefix: str = "availability",
) -> List[Person]:
    """Per-person date availability: always, only on, or never on chosen dates."""
    st.subheader("📆 Verfügbarkeit")
    updated = []
    for person in team:
        if person.available_dates is not None:
            mode, chosen = AVAILABILITY_MODES[1], person.available_dates
        elif person.unavailable_dates:
            mode, chosen = AVAILABILITY_MODES[2], person.unavailable_dates
        else:
            mode, chosen = AVAILABILITY_MODES[0], []

        with st.expander(person.name):
            mode = st.radio(
                "Modus",
                AVAILABILITY_MODES,
                index=AVAILABILITY_MODES.index(mode),
                key=f"{key_prefix}_{person.id}_mode",
                horizontal=True,
            )
            if mode != AVAILABILITY_MODES[0]:
                chosen = st.multiselect(
                    "Tage",
                    period_dates,
                    default=[d for d in chosen if d in period_dates],
                    key=f"{key_prefix}_{person.id}_dates",
                )

        updated.append(Person(
            id=person.id,
            name=person.name,
            exclude_morning_shifts=person.exclude_morning_shifts,
            exclude_evening_shifts=person.exclude_evening_shifts,
            available_dates=chosen if mode == AVAILABILITY_MODES[1] else None,
            unavailable_dates=chosen if mode == AVAILABILITY_MODES[2] else None,
        ))

    if on_change and [p.to_dict() for p in updated] != [p.to_dict() for p in team]:
        on_change(updated)
    return updated


def render_team_import(
    key_prefix: str = "team_import",
) -> Optional[List[Person]]:
    """
    Render CSV import widget.

    Returns:
        List of people if a file was uploaded and parsed, None otherwise
    """
    uploaded_file = st.file_uploader(
        "Team-CSV hochladen",
        type=["csv"],
        key=f"{key_prefix}_uploader",
        help="Semikolon-getrennt: Vorname;Nachname[;Ausschluss Morgen;Ausschluss Abend]",
    )
    if uploaded_file is None:
        return None

    # The uploader returns the same file on every rerun; import it once.
    marker = f"{uploaded_file.name}:{uploaded_file.size}"
    if st.session_state.get(f"{key_prefix}_last") == marker:
        return None
    st.session_state[f"{key_prefix}_last"] = marker

    try:
        text = uploaded_file.getvalue().decode("utf-8-sig")
    except UnicodeDecodeError:
        st.error("Die Datei ist nicht UTF-8 kodiert.")
        return None

    try:
        result = load_team(io.StringIO(text))
    except ValueError as e:
        st.error(f"CSV konnte nicht gelesen werden: {e}")
        return None

    for error in result.errors:
        st.warning(error)
    return result.people or None
