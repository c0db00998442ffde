"""Styled dataframe display helpers."""

import streamlit as st
import pandas as pd
from typing import Dict, List, Optional, Tuple

from models.flat import FlatId, FlatRecord, MaintenanceStatus
from models.maintenance import PaymentPeriod


def records_to_df(
    rows: List[Tuple[FlatId, FlatRecord]],
    dues: Optional[Dict[FlatId, MaintenanceStatus]] = None,
) -> pd.DataFrame:
    """Flatten (flat id, record) pairs into a directory table.

    "Recorded Status" is the status stored on the record; "Dues" is derived
    from the maintenance ledger and left blank for flats never billed.
    """
    dues = dues or {}
    return pd.DataFrame([{
        "Flat ID": str(flat_id),
        "Block": f"Block {flat_id.block_number}",
        "Floor": flat_id.floor,
        "Flat": flat_id.letter,
        "Owner Name": record.owner_name,
        "Contact Number": record.contact_number,
        "Email": record.email,
        "Registered": "Yes" if record.registered else "No",
        "Recorded Status": record.maintenance_status.value.title(),
        "Dues": dues[flat_id].value.title() if flat_id in dues else "",
    } for flat_id, record in rows])


def periods_to_df(periods: List[PaymentPeriod]) -> pd.DataFrame:
    return pd.DataFrame([{
        "Month": p.month,
        "Amount": p.amount,
        "Due Date": p.due_date.isoformat() if p.due_date else "",
        "Paid Date": p.paid_date.isoformat() if p.paid_date else "",
        "Paid Amount": p.paid_amount if p.paid_amount is not None else "",
        "Method": p.payment_method or "",
        "Status": p.status.value.upper(),
    } for p in periods])


def render_status_table(df: pd.DataFrame, status_column: str = "Status"):
    """Render a table with color-coded maintenance statuses."""
    def color_status(val):
        if val == "OVERDUE":
            return "background-color: #ffcccc; color: #cc0000; font-weight: bold"
        elif val == "PENDING":
            return "background-color: #fff3cd; color: #856404; font-weight: bold"
        elif val == "PAID":
            return "background-color: #d4edda; color: #155724; font-weight: bold"
        return ""

    if status_column in df.columns:
        styled = df.style.map(color_status, subset=[status_column])
        st.dataframe(styled, use_container_width=True, hide_index=True)
    else:
        st.dataframe(df, use_container_width=True, hide_index=True)


def render_directory_table(df: pd.DataFrame, registered_column: str = "Registered"):
    """Render the flat directory with registered rows highlighted."""
    def color_registered(val):
        if val == "Yes":
            return "color: #155724; font-weight: bold"
        elif val == "No":
            return "color: #856404"
        return ""

    if registered_column in df.columns:
        styled = df.style.map(color_registered, subset=[registered_column])
        st.dataframe(styled, use_container_width=True, hide_index=True)
    else:
        st.dataframe(df, use_container_width=True, hide_index=True)


def owner_initials(name: str) -> str:
    """Up to two initials from an owner name, letters only."""
    initials = [part[0] for part in (name or "").split() if part and part[0].isalpha()]
    return "".join(initials[:2]).upper()


def grid_owner_labels(block_number: str, rows, registry: Dict[FlatId, FlatRecord], columns: List[str]):
    """Initials for each registered cell of a block grid."""
    labels = []
    for floor, cells in rows:
        row_labels = []
        for letter, cell in zip(columns, cells):
            record = registry.get(FlatId(block_number, letter, floor)) if cell else None
            row_labels.append(owner_initials(record.owner_name) if record and record.registered else "")
        labels.append(row_labels)
    return labels
