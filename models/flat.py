import re
from dataclasses import dataclass, replace
from datetime import date, datetime
from enum import Enum
from typing import Optional

_LEGACY_ID = re.compile(r"^BLOCK(\d+)-(\d+)([A-Z])$")
_CANONICAL_ID = re.compile(r"^(\d+)([A-Z])(\d+)$")


class MaintenanceStatus(str, Enum):
    PAID = "paid"
    PENDING = "pending"
    OVERDUE = "overdue"


@dataclass(frozen=True, order=True)
class FlatId:
    block_number: str
    letter: str
    floor: int

    def __str__(self) -> str:
        return f"{self.block_number}{self.letter}{self.floor}"

    @classmethod
    def parse(cls, raw) -> "FlatId":
        """Parse a flat id typed by a user or read from the society sheet.

        Accepts the canonical "1D9" form and the legacy "Block 1-9D" form.
        """
        text = re.sub(r"\s+", "", str(raw or "")).upper()
        if not text:
            raise ValueError("Flat ID is required.")

        legacy = _LEGACY_ID.match(text)
        if legacy:
            block, floor, letter = legacy.groups()
            return cls(block, letter, int(floor))

        canonical = _CANONICAL_ID.match(text.replace("-", ""))
        if not canonical:
            raise ValueError(f"Invalid flat ID format: {raw}")
        block, letter, floor = canonical.groups()
        return cls(block, letter, int(floor))


@dataclass
class FlatRecord:
    owner_name: str = ""
    contact_number: str = ""
    email: str = ""
    family_members: str = ""        # free text
    issues: str = ""                # free text
    registered: bool = False
    maintenance_status: MaintenanceStatus = MaintenanceStatus.PENDING
    move_in_month: Optional[date] = None   # first day of the month
    emergency_contact_number: str = ""
    parking_allocation: str = ""           # "Covered", "Open", "No Parking" or blank
    blood_group: str = ""
    car_number: str = ""
    last_updated: Optional[datetime] = None

    def with_changes(self, **changes) -> "FlatRecord":
        return replace(self, **changes)


@dataclass
class SaveResult:
    success: bool
    message: str = ""
