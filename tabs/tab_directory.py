"""Tab 4: Directory — search owners and flats."""

import streamlit as st
from datetime import date

from data.session_store import get_registry, get_ledger, is_data_loaded
from components.tables import records_to_df, render_directory_table
from engine.maintenance import dues_status_by_flat
from engine.search import search


def render(sidebar_state):
    """Render the Directory tab."""
    st.header("Resident Directory")

    if not is_data_loaded():
        st.info("No flat data loaded. Please load data in the Admin tab.")
        return

    query = st.text_input(
        "Search",
        placeholder="Search by owner name, flat number...",
        key="directory_query",
    )
    results = search(query, get_registry())

    if not results:
        st.warning(f"No flats match '{query}'.")
        return

    st.caption(f"{len(results)} flat{'s' if len(results) != 1 else ''}")
    dues = dues_status_by_flat(get_ledger(), [fid for fid, _ in results], date.today())
    df = records_to_df(results, dues)
    if not sidebar_state.identity.is_admin:
        df = df.drop(columns=["Contact Number", "Email"])
    render_directory_table(df)
    st.caption("Recorded Status is set on the flat record; Dues comes from the maintenance ledger.")
