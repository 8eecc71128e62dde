"""Streamlit UI for the seating planner with CSV previews and a seating proposal."""
from __future__ import annotations

import io

import pandas as pd
import streamlit as st
import streamlit.components.v1 as components

from seating_planner.csv_loader import load_guests, load_relationships, load_tables
from seating_planner.report import needs_attention, plan_report
from seating_planner.seating_map import generate_seating_map
from seating_planner.solver import SeatingModel

# -----------------------------
# Helpers
# -----------------------------

def uploaded_text(uploaded_file) -> io.StringIO:
    """Rewind a Streamlit UploadedFile and return its contents as a text buffer."""
    uploaded_file.seek(0)
    return io.StringIO(uploaded_file.read().decode("utf-8"))

def preview(uploaded_file, label: str) -> None:
    st.subheader(f"{label} preview")
    st.dataframe(pd.read_csv(uploaded_text(uploaded_file), dtype=str), use_container_width=True)

# -----------------------------
# Sidebar options
# -----------------------------

st.sidebar.header("Seating Options")
strict = st.sidebar.checkbox(
    "Strict placement",
    value=False,
    help="Leave guests unseated rather than seat them next to a conflict or at a full table.",
)
balance = st.sidebar.checkbox(
    "Balance tables",
    value=True,
    help="Move guests from crowded tables to sparse ones when no conflict is introduced.",
)

# -----------------------------
# Main UI and previews
# -----------------------------

st.title("Wedding Seating Assistant")

_guests_file = st.file_uploader("Guests CSV", type="csv")
_tables_file = st.file_uploader("Tables CSV", type="csv")
_relationships_file = st.file_uploader("Relationships CSV", type="csv")

for _file, _label in ((_guests_file, "Guests"), (_tables_file, "Tables"), (_relationships_file, "Relationships")):
    if _file is not None:
        preview(_file, _label)

run_disabled = not (_guests_file and _tables_file and _relationships_file)
run_clicked = st.button("Suggest seating", disabled=run_disabled, key="run_solver_button")

# -----------------------------
# Solve
# -----------------------------

if run_clicked and not run_disabled:
    try:
        guests = load_guests(uploaded_text(_guests_file))
        tables = load_tables(uploaded_text(_tables_file))
        relationships = load_relationships(uploaded_text(_relationships_file))
    except ValueError as e:
        st.error(f"Input validation error: {e}")
        st.stop()

    if guests and not tables:
        st.error("Add at least one table before suggesting a seating plan.")
        st.stop()

    model = SeatingModel(policy="strict" if strict else "best_effort", balance=balance)
    model.build(guests, tables, relationships)
    plan = model.solve()

    names = {g.id: g.name for g in guests}
    assignments = plan.assignments()
    result_df = pd.DataFrame(
        {
            "guest": [names[gid] for gid in assignments],
            "guest_id": list(assignments.keys()),
            "table": list(assignments.values()),
        }
    )
    st.subheader("Proposed assignments")
    st.dataframe(result_df, use_container_width=True)

    if plan.unseated:
        st.warning("Unseated: " + ", ".join(names[gid] for gid in plan.unseated))

    report = plan_report(plan, model.graph)
    report_df = pd.DataFrame(report)
    st.subheader("Tables")
    st.dataframe(report_df, use_container_width=True)
    if needs_attention(report):
        st.warning("Some tables are over capacity or seat conflicting guests.")

    st.download_button(
        "Download assignments as CSV",
        result_df.to_csv(index=False).encode("utf-8"),
        file_name="assignments.csv",
    )

    st.subheader("Seating map")
    components.html(generate_seating_map(plan, guests, relationships), height=720, scrolling=True)
