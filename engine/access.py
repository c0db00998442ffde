"""Which flats the acting identity may edit, and which fields."""

from typing import Dict, List
from models.block import Block
from models.flat import FlatId, FlatRecord
from models.session import Identity
from engine.topology import iter_flat_ids

OWNER_EDITABLE_FIELDS = (
    "owner_name",
    "contact_number",
    "email",
    "family_members",
    "issues",
    "move_in_month",
    "emergency_contact_number",
    "parking_allocation",
    "blood_group",
    "car_number",
)


def can_edit(identity: Identity, flat_id: FlatId) -> bool:
    if identity.is_admin:
        return True
    if identity.is_owner:
        return identity.flat_id == flat_id
    return False


def editable_flat_ids(
    identity: Identity,
    registry: Dict[FlatId, FlatRecord],
    topology: List[Block],
) -> List[FlatId]:
    """Flats offered for editing: topology order, then registry-only entries."""
    if identity.is_owner:
        return [identity.flat_id]
    if not identity.is_admin:
        return []

    ids = [fid for block in topology for fid in iter_flat_ids(block)]
    known = set(ids)
    ids.extend(fid for fid in registry if fid not in known)
    return ids


def apply_edit(identity: Identity, current: FlatRecord, changes: dict) -> FlatRecord:
    """Merge form changes into a record, dropping fields the role may not touch."""
    changes = dict(changes)
    if not identity.is_admin:
        changes = {k: v for k, v in changes.items() if k in OWNER_EDITABLE_FIELDS}
    changes.pop("registered", None)
    changes.pop("last_updated", None)
    return current.with_changes(**changes)
