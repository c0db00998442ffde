"""Flat registry mutations: registration on save, optimistic write-through."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional

from models.flat import FlatId, FlatRecord, SaveResult

logger = logging.getLogger(__name__)


@dataclass
class SaveOutcome:
    record: FlatRecord                 # what the registry now holds
    result: SaveResult                 # what the external store reported
    previous: Optional[FlatRecord]     # registry entry before the save, for rollback


def load_flat_record(
    registry: Dict[FlatId, FlatRecord],
    flat_id: FlatId,
    store,
) -> Optional[FlatRecord]:
    """Return the flat's record, reading it from the store on first access.

    A record fetched from the store is cached in the registry. Store read
    errors propagate and leave the registry untouched.
    """
    if flat_id in registry:
        return registry[flat_id]
    record = store.fetch_flat_record(flat_id)
    if record is not None:
        registry[flat_id] = record
        logger.info("Flat %s loaded from store", flat_id)
    return record


def save_flat_record(
    registry: Dict[FlatId, FlatRecord],
    flat_id: FlatId,
    record: FlatRecord,
    now: Optional[datetime] = None,
) -> FlatRecord:
    """Store a record, marking the flat registered.

    Registration is one-way: every save re-asserts registered=True regardless
    of which fields changed.
    """
    was_registered = flat_id in registry and registry[flat_id].registered
    stored = record.with_changes(registered=True, last_updated=now or datetime.now())
    registry[flat_id] = stored
    if not was_registered:
        logger.info("Flat %s registered", flat_id)
    return stored


def save_and_sync(
    registry: Dict[FlatId, FlatRecord],
    flat_id: FlatId,
    record: FlatRecord,
    store,
    now: Optional[datetime] = None,
) -> SaveOutcome:
    """Optimistically update the registry, then write through the store.

    A failed write leaves the local update in place; the caller decides
    whether to call restore_flat_record() with the returned previous entry.
    """
    previous = registry.get(flat_id)
    stored = save_flat_record(registry, flat_id, record, now)
    result = store.save_flat_record(flat_id, stored)
    if not result.success:
        logger.warning("Save for flat %s not persisted: %s", flat_id, result.message)
    return SaveOutcome(record=stored, result=result, previous=previous)


def restore_flat_record(
    registry: Dict[FlatId, FlatRecord],
    flat_id: FlatId,
    previous: Optional[FlatRecord],
) -> None:
    """Undo an optimistic save locally."""
    if previous is None:
        registry.pop(flat_id, None)
    else:
        registry[flat_id] = previous
    logger.info("Local state for flat %s rolled back", flat_id)
