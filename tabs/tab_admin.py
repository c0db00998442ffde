"""Tab 5: Admin — data loading, stale-record review and audit trail."""

import streamlit as st
import pandas as pd

from data.loader import load_file, parse_registry
from data.validator import validate_registry
from data.sample_data import generate_registry_df
from data.persistence import PersistenceError
from data.session_store import (
    get_topology, get_registry, set_registry, set_data_loaded, get_store,
    get_audit_log, add_audit_entry, set_last_error,
)
from engine.aggregation import orphaned_flat_ids, society_stats


def _load_and_validate(df: pd.DataFrame, source: str) -> bool:
    """Validate and store an uploaded registry sheet."""
    topology = get_topology()
    result = validate_registry(df, topology)

    if not result.is_valid:
        for e in result.errors:
            st.error(e)
        return False

    for w in result.warnings:
        st.warning(w)

    registry = parse_registry(df)
    set_registry(registry)
    set_data_loaded(True)
    add_audit_entry("upload", "registry", "", f"{len(registry)} records", note=source)

    stats = society_stats(topology, registry)
    st.success(
        f"Data loaded: {len(registry)} records, {stats.total_registered} registered "
        f"of {stats.total_flats} flats."
    )
    return True


def _load_from_store():
    try:
        registry = get_store().fetch_all()
    except PersistenceError as e:
        set_last_error(str(e))
        st.error(str(e))
        return
    set_registry(registry)
    set_data_loaded(True)
    set_last_error(None)
    add_audit_entry("upload", "registry", "", f"{len(registry)} records", note="store")
    st.success(f"Loaded {len(registry)} records from the society sheet.")


def render(sidebar_state):
    """Render the Admin tab."""
    st.header("Admin")

    if not sidebar_state.identity.is_admin:
        st.info("Administrator access is required for this tab.")
        return

    # --- Data Loading ---
    st.subheader("Flat Data")

    col_store, col_sample = st.columns(2)
    with col_store:
        if st.button("Load from Society Sheet", type="primary", key="btn_load_store"):
            _load_from_store()
    with col_sample:
        if st.button("Load Sample Data", key="btn_sample"):
            _load_and_validate(generate_registry_df(), "sample")

    uploaded = st.file_uploader("Or upload a sheet export", type=["csv", "xlsx"], key="upload_registry")
    if st.button("Upload & Validate", key="btn_upload"):
        if uploaded:
            try:
                _load_and_validate(load_file(uploaded), uploaded.name)
            except ValueError as e:
                st.error(f"Error loading file: {e}")
        else:
            st.warning("Please choose a CSV or Excel file.")

    st.divider()

    # --- Stale Records ---
    st.subheader("Records Outside the Building Layout")
    orphans = orphaned_flat_ids(get_topology(), get_registry())
    if orphans:
        st.warning(
            f"{len(orphans)} record(s) do not match any flat in the layout. "
            "They are counted in block registrations but not drawn on the grid."
        )
        st.write(", ".join(str(fid) for fid in orphans))
    else:
        st.success("Every record matches a flat in the building layout.")

    st.divider()

    # --- Audit Trail ---
    st.subheader("Audit Trail")
    log = get_audit_log()
    if log:
        st.dataframe(pd.DataFrame([{
            "Time": e.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
            "Action": e.action,
            "By": e.actor,
            "Flat": e.flat_id or "",
            "Field": e.field_changed,
            "Old": e.old_value,
            "New": e.new_value,
            "Note": e.note,
        } for e in reversed(log)]), use_container_width=True, hide_index=True)
    else:
        st.caption("No changes recorded in this session.")
