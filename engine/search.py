"""Owner/flat search over the registry."""

from typing import Dict, List, Tuple
from models.flat import FlatId, FlatRecord


def search(query: str, registry: Dict[FlatId, FlatRecord]) -> List[Tuple[FlatId, FlatRecord]]:
    """Case-insensitive substring match on owner name and flat id.

    Results keep registry insertion order. A blank query matches everything.
    """
    if not (query or "").strip():
        return list(registry.items())
    needle = query.lower()
    return [
        (flat_id, record) for flat_id, record in registry.items()
        if needle in record.owner_name.lower() or needle in str(flat_id).lower()
    ]
