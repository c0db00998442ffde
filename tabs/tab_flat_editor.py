"""Tab 2: Flat Editor — owner profile editing with optimistic save."""

import streamlit as st
from datetime import date

from data.session_store import (
    get_topology, get_registry, get_store, add_audit_entry, set_last_error,
)
from engine.access import can_edit, editable_flat_ids, apply_edit, OWNER_EDITABLE_FIELDS
from engine.registry import load_flat_record, save_and_sync, restore_flat_record
from data.persistence import PersistenceError
from engine.topology import is_valid_flat
from models.flat import FlatRecord, MaintenanceStatus
from config.defaults import PARKING_OPTIONS, BLOOD_GROUPS, MAINTENANCE_STATUSES


def _form(record: FlatRecord, is_admin: bool) -> dict:
    """Render the edit form and return the entered values."""
    col1, col2 = st.columns(2)
    with col1:
        owner_name = st.text_input("Owner Name", value=record.owner_name)
        contact_number = st.text_input("Contact Number", value=record.contact_number)
        email = st.text_input("Email", value=record.email)
        emergency = st.text_input("Emergency Contact", value=record.emergency_contact_number)
        move_in = st.date_input(
            "Move In Month", value=record.move_in_month, format="YYYY-MM-DD",
            help="Any day in the month; only year and month are kept.",
        )
    with col2:
        family_members = st.text_area("Family Members", value=record.family_members)
        parking_opts = [""] + PARKING_OPTIONS
        parking = st.selectbox(
            "Parking", parking_opts,
            index=parking_opts.index(record.parking_allocation) if record.parking_allocation in parking_opts else 0,
        )
        blood_opts = [""] + BLOOD_GROUPS
        blood_group = st.selectbox(
            "Blood Group", blood_opts,
            index=blood_opts.index(record.blood_group) if record.blood_group in blood_opts else 0,
        )
        car_number = st.text_input("Car Number", value=record.car_number)

    issues = st.text_area("Issues / Complaints", value=record.issues)

    values = {
        "owner_name": owner_name.strip(),
        "contact_number": contact_number.strip(),
        "email": email.strip(),
        "emergency_contact_number": emergency.strip(),
        "move_in_month": date(move_in.year, move_in.month, 1) if move_in else None,
        "family_members": family_members,
        "parking_allocation": parking,
        "blood_group": blood_group,
        "car_number": car_number.strip(),
        "issues": issues,
    }
    if is_admin:
        status = st.selectbox(
            "Maintenance Status", MAINTENANCE_STATUSES,
            index=MAINTENANCE_STATUSES.index(record.maintenance_status.value),
        )
        values["maintenance_status"] = MaintenanceStatus(status)
    return values


def render(sidebar_state):
    """Render the Flat Editor tab."""
    st.header("Flat Details")

    identity = sidebar_state.identity
    topology = get_topology()
    registry = get_registry()

    flat_ids = editable_flat_ids(identity, registry, topology)
    if not flat_ids:
        st.info("Sign in as the flat owner or an administrator to edit flat details.")
        return

    flat_id = st.selectbox("Flat", flat_ids, format_func=str, key="editor_flat")
    if not can_edit(identity, flat_id):
        st.error("You can only edit your own flat.")
        return

    if not is_valid_flat(topology, flat_id):
        st.warning(f"Flat {flat_id} is not part of the building layout (stale record).")

    try:
        stored = load_flat_record(registry, flat_id, get_store())
    except PersistenceError as e:
        set_last_error(str(e))
        st.error(f"{e} Editing is disabled until the flat's saved details can be loaded.")
        return
    current = stored or FlatRecord()
    if current.registered:
        st.success(f"Flat {flat_id} is registered.")
    else:
        st.caption(f"Flat {flat_id} is not registered yet. Saving the form registers it.")
    if not identity.is_admin:
        st.caption(f"Editable fields: {', '.join(f.replace('_', ' ') for f in OWNER_EDITABLE_FIELDS)}.")

    with st.form(key=f"flat_form_{flat_id}"):
        values = _form(current, identity.is_admin)
        submitted = st.form_submit_button("Save Details", type="primary")

    if submitted:
        updated = apply_edit(identity, current, values)
        outcome = save_and_sync(registry, flat_id, updated, get_store())
        add_audit_entry(
            "save", "record", "registered" if current.registered else "unregistered", "registered",
            flat_id=flat_id, note=outcome.result.message,
        )
        if outcome.result.success:
            set_last_error(None)
            st.success(outcome.result.message or "Details saved.")
        else:
            set_last_error(outcome.result.message)
            st.session_state["pending_rollback"] = (flat_id, outcome.previous)
            st.error(outcome.result.message)

    pending = st.session_state.get("pending_rollback")
    if pending and pending[0] == flat_id:
        st.warning("The last save was not stored remotely. Local changes are still shown.")
        if st.button("Discard local changes", key="btn_rollback"):
            restore_flat_record(registry, flat_id, pending[1])
            add_audit_entry("rollback", "record", "local", "restored", flat_id=flat_id)
            st.session_state["pending_rollback"] = None
            set_last_error(None)
            st.rerun()
