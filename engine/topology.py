"""Structural queries over block layouts: which flats exist on which floors."""

from typing import Dict, Iterator, List, Optional, Tuple
from models.block import Block
from models.flat import FlatId, FlatRecord

CELL_REGISTERED = "registered"
CELL_SIGNED_UP = "signed_up"   # record exists but registration not completed
CELL_VACANT = "vacant"


def flats_for_floor(block: Block, floor: int) -> List[str]:
    """Flat letters present on a floor, in layout order.

    A floor matched by no range has no flats. Uniform layouts ignore the
    floor count.
    """
    if not block.uses_ranges:
        return list(block.flats_per_floor)

    for rng in block.floor_ranges:
        if rng.contains(floor):
            return list(rng.letters)
    return []


def total_flats(block: Block) -> int:
    if not block.uses_ranges:
        return block.floors * len(block.flats_per_floor)
    return sum(rng.floor_count * len(rng.letters) for rng in block.floor_ranges)


def all_flat_letters(block: Block) -> List[str]:
    """Sorted union of letters across the layout, used as grid columns."""
    if not block.uses_ranges:
        return sorted(set(block.flats_per_floor))
    letters = set()
    for rng in block.floor_ranges:
        letters.update(rng.letters)
    return sorted(letters)


def find_block(topology: List[Block], block_number: str) -> Optional[Block]:
    return next((b for b in topology if b.number == block_number), None)


def _floor_numbers(block: Block) -> List[int]:
    if not block.uses_ranges:
        return list(range(1, block.floors + 1))
    floors = set()
    for rng in block.floor_ranges:
        floors.update(range(rng.start, rng.end + 1))
    return sorted(floors)


def is_valid_flat(topology: List[Block], flat_id: FlatId) -> bool:
    """True when the block's layout produces this letter on this floor."""
    block = find_block(topology, flat_id.block_number)
    if block is None:
        return False
    if not block.uses_ranges and not 1 <= flat_id.floor <= block.floors:
        return False
    return flat_id.letter in flats_for_floor(block, flat_id.floor)


def iter_flat_ids(block: Block) -> Iterator[FlatId]:
    """Enumerate every structurally valid flat, top floor first."""
    for floor in reversed(_floor_numbers(block)):
        for letter in flats_for_floor(block, floor):
            yield FlatId(block.number, letter, floor)


def block_grid(
    block: Block,
    registry: Dict[FlatId, FlatRecord],
) -> Tuple[List[str], List[Tuple[int, List[Optional[str]]]]]:
    """Rectangular floor x letter grid for display.

    Returns (columns, rows) where each row is (floor, cells). A cell is None
    when that floor has no flat with that letter.
    """
    columns = all_flat_letters(block)
    rows = []
    for floor in reversed(_floor_numbers(block)):
        present = set(flats_for_floor(block, floor))
        cells: List[Optional[str]] = []
        for letter in columns:
            if letter not in present:
                cells.append(None)
                continue
            record = registry.get(FlatId(block.number, letter, floor))
            if record is None:
                cells.append(CELL_VACANT)
            elif record.registered:
                cells.append(CELL_REGISTERED)
            else:
                cells.append(CELL_SIGNED_UP)
        rows.append((floor, cells))
    return columns, rows
