"""Tab 1: Society Overview — registration stats and the per-block flat grid."""

import streamlit as st
import pandas as pd

from data.session_store import get_topology, get_registry, is_data_loaded
from components.metrics_cards import render_society_stats, render_metric_row
from components.charts import registration_by_block_bar, registration_donut, block_grid_heatmap
from components.tables import grid_owner_labels
from engine.aggregation import society_stats, block_stats, block_stats_table
from engine.topology import block_grid


def render(sidebar_state):
    """Render the Society Overview tab."""
    st.header("Society Overview")

    topology = get_topology()
    registry = get_registry()

    if not is_data_loaded():
        st.info("No flat data loaded yet. Figures below reflect an empty registry.")

    # --- KPI Metrics ---
    stats = society_stats(topology, registry)
    render_society_stats(stats, len(topology))

    st.divider()

    # --- Charts ---
    rows = block_stats_table(topology, registry)
    col1, col2 = st.columns([3, 2])
    with col1:
        st.plotly_chart(registration_by_block_bar(rows), use_container_width=True)
    with col2:
        st.plotly_chart(registration_donut(stats.total_registered, stats.total_flats), use_container_width=True)

    st.divider()

    # --- Block Grid ---
    block = next((b for b in topology if b.name == sidebar_state.block_name), None)
    if block is None:
        return

    st.subheader(f"{block.name} Layout")
    b_stats = block_stats(block, registry)
    render_metric_row([
        {"label": "Registered", "value": f"{b_stats.registered_count}/{b_stats.total_flats}"},
        {"label": "Registration Rate", "value": f"{b_stats.rate:.1f}%"},
    ])

    columns, grid_rows = block_grid(block, registry)
    labels = grid_owner_labels(block.number, grid_rows, registry, columns)
    st.plotly_chart(block_grid_heatmap(block.name, columns, grid_rows, labels), use_container_width=True)
    st.caption("Green: registered. Amber: signed up, registration pending. Grey: no record.")

    with st.expander("Block summary table"):
        df = pd.DataFrame(rows).rename(columns={
            "block": "Block", "registered": "Registered", "total_flats": "Total Flats",
            "unregistered": "Unregistered", "rate_pct": "Rate (%)",
        })
        st.dataframe(df.round({"Rate (%)": 1}), use_container_width=True, hide_index=True)
