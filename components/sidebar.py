"""Global sidebar controls: acting role and block selection."""

import streamlit as st
from dataclasses import dataclass
from data.session_store import (
    get_topology, get_identity, set_identity, is_data_loaded, get_last_error,
)
from models.flat import FlatId
from models.session import Identity, ANONYMOUS
from config.defaults import SOCIETY_NAME, ROLES

ROLE_LABELS = {"anonymous": "Visitor", "admin": "Administrator", "owner": "Flat Owner"}


@dataclass
class SidebarState:
    identity: Identity
    block_name: str


def _select_identity() -> Identity:
    """Stand-in identity provider; the dashboard only needs the reported role."""
    current = get_identity()
    roles = ROLES
    role = st.selectbox(
        "Viewing as",
        options=roles,
        format_func=lambda r: ROLE_LABELS[r],
        index=roles.index(current.role),
        key="sidebar_role",
    )

    if role == "admin":
        return Identity.admin()
    if role == "owner":
        default = str(current.flat_id) if current.flat_id else ""
        raw = st.text_input("Your Flat ID", value=default, placeholder="e.g. 1A3", key="sidebar_flat_id")
        if not raw:
            return ANONYMOUS
        try:
            return Identity.owner(FlatId.parse(raw))
        except ValueError as e:
            st.error(str(e))
            return ANONYMOUS
    return ANONYMOUS


def render_sidebar() -> SidebarState:
    """Render the global sidebar controls and return current state."""
    with st.sidebar:
        st.title(SOCIETY_NAME)
        st.divider()

        identity = _select_identity()
        if identity != get_identity():
            set_identity(identity)

        topology = get_topology()
        block_names = [b.name for b in topology]
        block_name = st.selectbox("Block", options=block_names, key="sidebar_block")

        st.divider()

        if is_data_loaded():
            st.success("Flat data loaded")
        else:
            st.warning("No flat data loaded — go to the Admin tab")

        last_error = get_last_error()
        if last_error:
            st.error(last_error)

        if identity.is_owner:
            st.caption(f"Signed in for flat {identity.flat_id}")

    return SidebarState(identity=identity, block_name=block_name)
