"""Tests for the topology model."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from models.block import Block, FloorRange, block_from_config, load_topology
from models.flat import FlatId, FlatRecord
from engine.topology import (
    flats_for_floor,
    total_flats,
    all_flat_letters,
    is_valid_flat,
    iter_flat_ids,
    find_block,
    block_grid,
    CELL_REGISTERED,
    CELL_SIGNED_UP,
    CELL_VACANT,
)


def make_range_block(name="Block 1"):
    return Block(name, 12, floor_ranges=(
        FloorRange(1, 8, ("A", "B", "C", "D", "E", "F")),
        FloorRange(9, 12, ("A", "B", "C")),
    ))


def make_uniform_block(name="Block 2", floors=12, letters=("A", "B", "C", "D")):
    return Block(name, floors, flats_per_floor=letters)


class TestFlatsForFloor:
    def test_upper_range(self):
        assert flats_for_floor(make_range_block(), 9) == ["A", "B", "C"]

    def test_lower_range_boundary(self):
        assert flats_for_floor(make_range_block(), 8) == ["A", "B", "C", "D", "E", "F"]

    def test_floor_outside_ranges_is_empty(self):
        assert flats_for_floor(make_range_block(), 13) == []
        assert flats_for_floor(make_range_block(), 0) == []

    def test_uniform_ignores_floor_count(self):
        block = make_uniform_block(floors=3)
        assert flats_for_floor(block, 40) == ["A", "B", "C", "D"]

    def test_first_matching_range_wins(self):
        block = Block("Block 9", 4, floor_ranges=(
            FloorRange(1, 3, ("A", "B")),
            FloorRange(3, 4, ("C",)),
        ))
        assert flats_for_floor(block, 3) == ["A", "B"]


class TestTotalsAndLetters:
    def test_range_total(self):
        assert total_flats(make_range_block()) == 8 * 6 + 4 * 3

    def test_uniform_total(self):
        assert total_flats(make_uniform_block()) == 48

    def test_all_letters_sorted_union(self):
        block = Block("Block 7", 4, floor_ranges=(
            FloorRange(1, 2, ("D", "B")),
            FloorRange(3, 4, ("A", "C", "B")),
        ))
        assert all_flat_letters(block) == ["A", "B", "C", "D"]

    def test_range_block_letters(self):
        assert all_flat_letters(make_range_block()) == ["A", "B", "C", "D", "E", "F"]


class TestBlockConstruction:
    def test_both_layouts_rejected(self):
        with pytest.raises(ValueError):
            Block("Block 1", 2, flats_per_floor=("A",), floor_ranges=(FloorRange(1, 2, ("A",)),))

    def test_neither_layout_rejected(self):
        with pytest.raises(ValueError):
            Block("Block 1", 2)

    def test_block_number_from_name(self):
        assert make_uniform_block("Block 12").number == "12"

    def test_from_config(self):
        block = block_from_config("Block 3", {"floors": 12, "floor_ranges": [(1, 8, ["A", "B"]), (9, 12, ["A"])]})
        assert block.uses_ranges
        assert total_flats(block) == 8 * 2 + 4

    def test_load_topology_keeps_order(self):
        topology = load_topology({
            "Block 2": {"floors": 1, "flats_per_floor": ["A"]},
            "Block 1": {"floors": 1, "flats_per_floor": ["A"]},
        })
        assert [b.name for b in topology] == ["Block 2", "Block 1"]


class TestValidity:
    def test_letter_missing_on_upper_floor(self):
        topology = [make_range_block()]
        assert not is_valid_flat(topology, FlatId("1", "D", 9))
        assert is_valid_flat(topology, FlatId("1", "D", 8))

    def test_unknown_block(self):
        assert not is_valid_flat([make_range_block()], FlatId("7", "A", 1))

    def test_uniform_floor_beyond_count(self):
        topology = [make_uniform_block()]
        assert not is_valid_flat(topology, FlatId("2", "A", 13))
        assert is_valid_flat(topology, FlatId("2", "A", 12))

    def test_find_block(self):
        topology = [make_range_block(), make_uniform_block()]
        assert find_block(topology, "2").name == "Block 2"
        assert find_block(topology, "5") is None


class TestEnumeration:
    def test_iter_count_matches_total(self):
        block = make_range_block()
        ids = list(iter_flat_ids(block))
        assert len(ids) == total_flats(block)
        assert len(set(ids)) == len(ids)

    def test_top_floor_first(self):
        ids = list(iter_flat_ids(make_range_block()))
        assert ids[0] == FlatId("1", "A", 12)
        assert ids[-1] == FlatId("1", "F", 1)

    def test_grid_marks_missing_cells(self):
        block = make_range_block()
        registry = {
            FlatId("1", "A", 9): FlatRecord(owner_name="Asha", registered=True),
            FlatId("1", "B", 9): FlatRecord(),
            FlatId("1", "D", 9): FlatRecord(registered=True),  # stale
        }
        columns, rows = block_grid(block, registry)
        assert columns == ["A", "B", "C", "D", "E", "F"]
        assert len(rows) == 12

        floor_9 = dict(rows)[9]
        assert floor_9 == [CELL_REGISTERED, CELL_SIGNED_UP, CELL_VACANT, None, None, None]

        floor_1 = dict(rows)[1]
        assert floor_1 == [CELL_VACANT] * 6


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
