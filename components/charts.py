"""Plotly chart builders for the Society Dashboard."""

import plotly.express as px
import plotly.graph_objects as go
import pandas as pd
from typing import List, Optional, Tuple

from engine.topology import CELL_REGISTERED, CELL_SIGNED_UP, CELL_VACANT

# Cell state -> heatmap value
_CELL_CODES = {None: None, CELL_VACANT: 0, CELL_SIGNED_UP: 1, CELL_REGISTERED: 2}
_CELL_LABELS = {None: "", CELL_VACANT: "Vacant", CELL_SIGNED_UP: "Pending registration", CELL_REGISTERED: "Registered"}


def registration_by_block_bar(
    block_rows: List[dict],
    title: str = "Registrations by Block",
) -> go.Figure:
    """Stacked bar of registered vs unregistered flats per block."""
    df = pd.DataFrame(block_rows)
    fig = px.bar(
        df, x="block", y=["registered", "unregistered"],
        barmode="stack",
        labels={"value": "Flats", "block": "Block", "variable": ""},
        title=title,
        color_discrete_map={"registered": "#22A06B", "unregistered": "#CBD5E1"},
    )
    fig.update_layout(legend_title_text="", height=400)
    return fig


def registration_donut(registered: int, total: int, title: str = "Society Registration") -> go.Figure:
    """Donut chart of registered vs unregistered flats."""
    unregistered = max(0, total - registered)
    fig = go.Figure(data=[go.Pie(
        labels=["Registered", "Unregistered"],
        values=[registered, unregistered],
        hole=0.6,
        marker_colors=["#22A06B", "#CBD5E1"],
        textinfo="percent+label",
    )])
    fig.update_layout(
        title=title,
        height=350,
        showlegend=True,
        annotations=[dict(text=f"{registered}/{total}", x=0.5, y=0.5, font_size=16, showarrow=False)],
    )
    return fig


def block_grid_heatmap(
    block_name: str,
    columns: List[str],
    rows: List[Tuple[int, List[Optional[str]]]],
    owner_labels: Optional[List[List[str]]] = None,
) -> go.Figure:
    """Floor x flat-letter grid coloured by registration state.

    Cells the floor does not have are left blank.
    """
    z = [[_CELL_CODES[c] for c in cells] for _, cells in rows]
    hover = [[_CELL_LABELS[c] for c in cells] for _, cells in rows]
    text = owner_labels if owner_labels is not None else [["" for _ in cells] for _, cells in rows]
    floors = [str(floor) for floor, _ in rows]

    fig = go.Figure(data=go.Heatmap(
        z=z,
        x=columns,
        y=floors,
        zmin=0,
        zmax=2,
        colorscale=[[0.0, "#E2E8F0"], [0.5, "#F59E0B"], [1.0, "#22A06B"]],
        showscale=False,
        text=text,
        texttemplate="%{text}",
        customdata=hover,
        hovertemplate="Floor %{y}, Flat %{x}<br>%{customdata}<extra></extra>",
        xgap=3,
        ygap=3,
    ))
    fig.update_layout(
        title=block_name,
        xaxis_title="Flat",
        yaxis_title="Floor",
        yaxis_type="category",
        height=max(350, len(rows) * 32),
    )
    return fig


def dues_by_block_bar(dues_rows: List[dict]) -> go.Figure:
    """Outstanding maintenance per block, split pending vs overdue."""
    df = pd.DataFrame(dues_rows)
    fig = px.bar(
        df, x="block", y=["pending_amount", "overdue_amount"],
        barmode="stack",
        labels={"value": "Outstanding", "block": "Block", "variable": ""},
        title="Outstanding Maintenance by Block",
        color_discrete_map={"pending_amount": "#F59E0B", "overdue_amount": "#DC2626"},
    )
    fig.update_layout(legend_title_text="", height=380)
    return fig
