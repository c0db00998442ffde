from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class FloorRange:
    start: int
    end: int                   # inclusive
    letters: Tuple[str, ...]

    def contains(self, floor: int) -> bool:
        return self.start <= floor <= self.end

    @property
    def floor_count(self) -> int:
        return max(0, self.end - self.start + 1)


@dataclass(frozen=True)
class Block:
    """One building: a floor count plus exactly one layout rule."""
    name: str                                        # e.g. "Block 1"
    floors: int
    flats_per_floor: Optional[Tuple[str, ...]] = None
    floor_ranges: Tuple[FloorRange, ...] = field(default_factory=tuple)

    def __post_init__(self):
        has_uniform = self.flats_per_floor is not None
        has_ranges = len(self.floor_ranges) > 0
        if has_uniform == has_ranges:
            raise ValueError(
                f"{self.name}: define either flats_per_floor or floor_ranges, not both or neither."
            )

    @property
    def number(self) -> str:
        """Digits of the block name, used as the first component of a flat id."""
        digits = "".join(c for c in self.name if c.isdigit())
        return digits or self.name.strip()

    @property
    def uses_ranges(self) -> bool:
        return self.flats_per_floor is None


def block_from_config(name: str, layout: dict) -> Block:
    """Build a Block from one entry of BLOCK_LAYOUTS."""
    if "floor_ranges" in layout:
        ranges = tuple(
            FloorRange(int(start), int(end), tuple(letters))
            for start, end, letters in layout["floor_ranges"]
        )
        return Block(name=name, floors=int(layout["floors"]), floor_ranges=ranges)
    letters = layout.get("flats_per_floor")
    return Block(
        name=name,
        floors=int(layout["floors"]),
        flats_per_floor=tuple(letters) if letters is not None else None,
    )


def load_topology(layouts: dict) -> List[Block]:
    """Build the society topology, preserving configuration order."""
    return [block_from_config(name, layout) for name, layout in layouts.items()]
