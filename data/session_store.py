"""Typed wrapper around st.session_state for application data."""

import streamlit as st
from typing import Dict, List, Optional
from datetime import datetime
from models.block import Block, load_topology
from models.flat import FlatId, FlatRecord
from models.maintenance import MaintenanceLedger
from models.session import Identity, ANONYMOUS
from models.audit import AuditEntry
from data.persistence import FlatStore, InMemoryFlatStore
from config.defaults import BLOCK_LAYOUTS, DEFAULT_MAINTENANCE_RATE


def initialize_session_state(topology: Optional[List[Block]] = None, store: Optional[FlatStore] = None):
    """Initialize all session state keys with defaults.

    The topology is built once per session from configuration and never
    mutated afterwards.
    """
    defaults = {
        "topology": topology if topology is not None else load_topology(BLOCK_LAYOUTS),
        "registry": {},
        "ledger": MaintenanceLedger(default_rate=DEFAULT_MAINTENANCE_RATE),
        "identity": ANONYMOUS,
        "store": store if store is not None else InMemoryFlatStore(),
        "audit_log": [],
        "data_loaded": False,
        "last_error": None,
    }
    for key, default in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = default


# --- Getters ---

def get_topology() -> List[Block]:
    return st.session_state.get("topology", [])


def get_registry() -> Dict[FlatId, FlatRecord]:
    return st.session_state.get("registry", {})


def get_ledger() -> MaintenanceLedger:
    return st.session_state["ledger"]


def get_identity() -> Identity:
    return st.session_state.get("identity", ANONYMOUS)


def get_store() -> FlatStore:
    return st.session_state["store"]


def get_audit_log() -> List[AuditEntry]:
    return st.session_state.get("audit_log", [])


def get_last_error() -> Optional[str]:
    return st.session_state.get("last_error")


def is_data_loaded() -> bool:
    return st.session_state.get("data_loaded", False)


# --- Setters ---

def set_registry(registry: Dict[FlatId, FlatRecord]):
    st.session_state["registry"] = registry


def set_identity(identity: Identity):
    st.session_state["identity"] = identity


def set_data_loaded(loaded: bool):
    st.session_state["data_loaded"] = loaded


def set_last_error(message: Optional[str]):
    st.session_state["last_error"] = message


# --- Audit ---

def add_audit_entry(
    action: str,
    field_changed: str,
    old_value: str,
    new_value: str,
    flat_id: Optional[FlatId] = None,
    note: str = "",
):
    entry = AuditEntry(
        timestamp=datetime.now(),
        action=action,
        actor=get_identity().role,
        flat_id=str(flat_id) if flat_id is not None else None,
        field_changed=field_changed,
        old_value=old_value,
        new_value=new_value,
        note=note,
    )
    st.session_state["audit_log"].append(entry)
