"""Tests for the aggregation engine."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from models.block import Block, FloorRange
from models.flat import FlatId, FlatRecord
from engine.aggregation import (
    block_stats,
    society_stats,
    registration_rate,
    orphaned_flat_ids,
    block_stats_table,
)


def make_range_block():
    return Block("Block 1", 12, floor_ranges=(
        FloorRange(1, 8, ("A", "B", "C", "D", "E", "F")),
        FloorRange(9, 12, ("A", "B", "C")),
    ))


def make_uniform_block(name="Block 2"):
    return Block(name, 12, flats_per_floor=("A", "B", "C", "D"))


def make_record(registered=True, owner="Owner"):
    return FlatRecord(owner_name=owner, registered=registered)


class TestBlockStats:
    def test_counts_registered_only(self):
        registry = {
            FlatId("1", "A", 1): make_record(),
            FlatId("1", "B", 1): make_record(registered=False),
            FlatId("2", "A", 1): make_record(),
        }
        stats = block_stats(make_range_block(), registry)
        assert stats.registered_count == 1
        assert stats.total_flats == 60
        assert abs(stats.rate - 100 / 60) < 1e-9

    def test_stale_entry_counted_but_total_unchanged(self):
        registry = {FlatId("1", "D", 9): make_record()}
        stats = block_stats(make_range_block(), registry)
        assert stats.total_flats == 60
        assert stats.registered_count == 1

    def test_zero_total_has_zero_rate(self):
        assert registration_rate(0, 0) == 0
        empty = Block("Block 3", 0, flats_per_floor=("A",))
        stats = block_stats(empty, {})
        assert stats.total_flats == 0
        assert stats.rate == 0

    def test_block_prefix_does_not_collide(self):
        block_1 = make_range_block()
        registry = {FlatId("11", "A", 1): make_record()}
        assert block_stats(block_1, registry).registered_count == 0

    def test_recomputed_on_every_read(self):
        block = make_uniform_block()
        registry = {}
        assert block_stats(block, registry).registered_count == 0
        registry[FlatId("2", "A", 3)] = make_record()
        assert block_stats(block, registry).registered_count == 1


class TestSocietyStats:
    def test_sums_blocks(self):
        topology = [make_range_block(), make_uniform_block()]
        registry = {
            FlatId("1", "A", 1): make_record(),
            FlatId("2", "C", 5): make_record(),
            FlatId("2", "D", 5): make_record(registered=False),
        }
        stats = society_stats(topology, registry)
        assert stats.total_flats == 60 + 48
        assert stats.total_registered == 2
        assert stats.total_vacant == 106

    def test_records_for_unknown_block_ignored(self):
        topology = [make_uniform_block()]
        registry = {FlatId("9", "A", 1): make_record()}
        stats = society_stats(topology, registry)
        assert stats.total_registered == 0
        assert stats.total_vacant == 48

    def test_empty_society(self):
        stats = society_stats([], {})
        assert stats.total_flats == 0
        assert stats.registration_rate == 0


class TestOrphans:
    def test_lists_structurally_invalid_ids(self):
        topology = [make_range_block(), make_uniform_block()]
        registry = {
            FlatId("1", "A", 9): make_record(),
            FlatId("1", "D", 9): make_record(),
            FlatId("7", "A", 1): make_record(),
        }
        assert orphaned_flat_ids(topology, registry) == [FlatId("1", "D", 9), FlatId("7", "A", 1)]

    def test_table_rows(self):
        topology = [make_range_block(), make_uniform_block()]
        rows = block_stats_table(topology, {FlatId("2", "A", 1): make_record()})
        assert [r["block"] for r in rows] == ["Block 1", "Block 2"]
        assert rows[1]["registered"] == 1
        assert rows[1]["unregistered"] == 47


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
