"""Reusable KPI metric card widgets."""

import streamlit as st

from engine.aggregation import SocietyStats
from models.flat import MaintenanceStatus


def render_metric_row(metrics: list[dict]):
    """Render a row of metric cards.

    Each metric dict should have: label, value, and optionally delta, delta_color.
    """
    cols = st.columns(len(metrics))
    for col, m in zip(cols, metrics):
        with col:
            st.metric(
                label=m["label"],
                value=m["value"],
                delta=m.get("delta"),
                delta_color=m.get("delta_color", "normal"),
            )


def render_society_stats(stats: SocietyStats, block_count: int):
    render_metric_row([
        {"label": "Total Flats", "value": f"{stats.total_flats:,}",
         "delta": f"Across {block_count} blocks", "delta_color": "off"},
        {"label": "Registered", "value": f"{stats.total_registered:,}",
         "delta": f"{stats.registration_rate:.1f}% registered", "delta_color": "off"},
        {"label": "Unregistered", "value": f"{stats.total_vacant:,}"},
        {"label": "Blocks", "value": str(block_count)},
    ])


def render_status_badge(status: MaintenanceStatus):
    """Coloured maintenance status badge."""
    if status == MaintenanceStatus.PAID:
        st.success("Paid", icon="✅")
    elif status == MaintenanceStatus.OVERDUE:
        st.error("Overdue", icon="🔴")
    else:
        st.warning("Pending", icon="🟡")
