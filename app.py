"""Society Dashboard — Streamlit entry point."""

import streamlit as st
import sys
import os

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from components.sidebar import render_sidebar
from config.defaults import SOCIETY_NAME, SHEETDB_API_URL, LOG_LEVEL
from config.logging_setup import setup_logging
from data.persistence import InMemoryFlatStore, SheetDBFlatStore
from data.session_store import initialize_session_state
from tabs import (
    tab_society_overview,
    tab_flat_editor,
    tab_maintenance,
    tab_directory,
    tab_admin,
)


def main():
    st.set_page_config(
        page_title=SOCIETY_NAME,
        page_icon="🏢",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    setup_logging(LOG_LEVEL)
    store = SheetDBFlatStore(SHEETDB_API_URL) if SHEETDB_API_URL else InMemoryFlatStore()
    initialize_session_state(store=store)
    sidebar_state = render_sidebar()

    tab1, tab2, tab3, tab4, tab5 = st.tabs([
        "📊 Overview",
        "🏠 Flat Details",
        "💰 Maintenance",
        "🔎 Directory",
        "⚙️ Admin",
    ])

    with tab1:
        tab_society_overview.render(sidebar_state)
    with tab2:
        tab_flat_editor.render(sidebar_state)
    with tab3:
        tab_maintenance.render(sidebar_state)
    with tab4:
        tab_directory.render(sidebar_state)
    with tab5:
        tab_admin.render(sidebar_state)


if __name__ == "__main__":
    main()
