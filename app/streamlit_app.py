"""
Stationsplan: Streamlit Web UI
==============================
Fair two-person station schedules with randomized greedy planning.
"""
import sys
import os
import streamlit as st

# Add src and project root to python path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../src"))

from app.state.session import SessionStateManager
from app.components.styling import apply_styling
from app.views.inputs import render_inputs
from app.views.dashboard import render_dashboard
from app.views.export import render_downloads

from stationplan.solver.planner import generate
from stationplan.utils.logging_setup import setup_logging
from stationplan.utils.structured_logging import configure_structlog


@st.cache_resource
def _init_logging():
    setup_logging(level="INFO")
    configure_structlog(json_output=False)


def main():
    # 1. Init
    st.set_page_config(page_title="Stationsplan", page_icon="📅", layout="wide")
    _init_logging()
    SessionStateManager.init_state()
    state = SessionStateManager()
    apply_styling()

    st.title("📅 Stationsplan: Zweier-Besetzung")

    if st.session_state.get("csv_exported"):
        st.success("✅ CSV exportiert. Alle Daten wurden gelöscht.")
        st.session_state["csv_exported"] = False

    # 2. Sidebar (Inputs)
    render_inputs(state)

    # 3. Generation (triggered from the sidebar)
    _handle_generation(state)

    # 4. Results
    if state.result is None:
        render_dashboard(state)
        return

    t1, t2 = st.tabs(["📈 Plan", "📥 Export"])
    with t1:
        render_dashboard(state)
    with t2:
        render_downloads(state)


def _handle_generation(state: SessionStateManager):
    """Run the planner if triggered."""
    if not state.trigger_generate:
        return
    state.trigger_generate = False

    with st.spinner("🚀 Plan wird erstellt..."):
        result = generate(
            state.people,
            state.stations,
            state.config,
            seed=state.config_seed or None,
            enforce_capacity=not state.allow_understaffed,
        )
    state.result = result

    if result.success:
        st.success(f"✅ Plan erstellt! Fairness: {result.fairness.fairness_score:.0%}")
    elif result.assignments:
        st.warning(f"⚠️ Plan mit {len(result.issues)} Lücken erstellt.")
    else:
        st.error("❌ Kein Plan möglich.")


if __name__ == "__main__":
    main()
