"""Registration statistics derived from topology + registry on every read.

Counting policy: registered counts are registry-driven. Any registered record
whose block component matches is counted, whether or not the topology
produces that flat. Totals always come from the topology. Stale records are
surfaced separately through orphaned_flat_ids().
"""

from dataclasses import dataclass
from typing import Dict, List
from models.block import Block
from models.flat import FlatId, FlatRecord
from engine.topology import total_flats, is_valid_flat


@dataclass
class BlockStats:
    registered_count: int
    total_flats: int
    rate: float          # percentage, 0-100


@dataclass
class SocietyStats:
    total_flats: int
    total_registered: int
    total_vacant: int

    @property
    def registration_rate(self) -> float:
        return registration_rate(self.total_registered, self.total_flats)


def registration_rate(registered_count: int, total: int) -> float:
    if total == 0:
        return 0.0
    return registered_count / total * 100


def block_stats(block: Block, registry: Dict[FlatId, FlatRecord]) -> BlockStats:
    registered = sum(
        1 for flat_id, record in registry.items()
        if flat_id.block_number == block.number and record.registered
    )
    total = total_flats(block)
    return BlockStats(
        registered_count=registered,
        total_flats=total,
        rate=registration_rate(registered, total),
    )


def society_stats(topology: List[Block], registry: Dict[FlatId, FlatRecord]) -> SocietyStats:
    total = 0
    registered = 0
    for block in topology:
        stats = block_stats(block, registry)
        total += stats.total_flats
        registered += stats.registered_count
    return SocietyStats(
        total_flats=total,
        total_registered=registered,
        total_vacant=total - registered,
    )


def orphaned_flat_ids(topology: List[Block], registry: Dict[FlatId, FlatRecord]) -> List[FlatId]:
    """Registry keys the topology does not produce, in registry order."""
    return [flat_id for flat_id in registry if not is_valid_flat(topology, flat_id)]


def block_stats_table(topology: List[Block], registry: Dict[FlatId, FlatRecord]) -> List[dict]:
    """Per-block rows for charts and tables."""
    rows = []
    for block in topology:
        stats = block_stats(block, registry)
        rows.append({
            "block": block.name,
            "registered": stats.registered_count,
            "total_flats": stats.total_flats,
            "unregistered": max(0, stats.total_flats - stats.registered_count),
            "rate_pct": stats.rate,
        })
    return rows
