"""Schema validation for uploaded society-sheet exports."""

from dataclasses import dataclass, field
from typing import List
import pandas as pd

from models.block import Block
from models.flat import FlatId
from engine.topology import is_valid_flat
from config.defaults import MAINTENANCE_STATUSES


@dataclass
class ValidationResult:
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


REGISTRY_REQUIRED_COLUMNS = [
    "Flat ID",
    "Owner Name",
    "Registered",
]


def _check_required_columns(df: pd.DataFrame, required: List[str], file_label: str) -> ValidationResult:
    result = ValidationResult()
    missing = [col for col in required if col not in df.columns]
    if missing:
        result.is_valid = False
        result.errors.append(f"{file_label}: Missing required columns: {', '.join(missing)}")
    if df.empty:
        result.is_valid = False
        result.errors.append(f"{file_label}: File contains no data rows.")
    return result


def validate_registry(df: pd.DataFrame, topology: List[Block]) -> ValidationResult:
    result = _check_required_columns(df, REGISTRY_REQUIRED_COLUMNS, "Flat Registry")
    if not result.is_valid:
        return result

    parsed = []
    unreadable = []
    for raw in df["Flat ID"]:
        if pd.isna(raw) or not str(raw).strip():
            unreadable.append("<blank>")
            continue
        try:
            parsed.append(FlatId.parse(raw))
        except ValueError:
            unreadable.append(str(raw))

    if unreadable:
        result.is_valid = False
        result.errors.append(f"Flat Registry: Unreadable Flat IDs: {', '.join(unreadable)}")

    seen = set()
    dupes = []
    for flat_id in parsed:
        if flat_id in seen and str(flat_id) not in dupes:
            dupes.append(str(flat_id))
        seen.add(flat_id)
    if dupes:
        result.is_valid = False
        result.errors.append(f"Flat Registry: Duplicate Flat IDs: {', '.join(dupes)}")

    if "Maintenance Status" in df.columns:
        statuses = df["Maintenance Status"].dropna().astype(str).str.strip().str.lower()
        bad = sorted(set(statuses) - set(MAINTENANCE_STATUSES) - {""})
        if bad:
            result.warnings.append(
                f"Flat Registry: Unknown maintenance statuses {bad} will be read as 'pending'."
            )

    stale = [str(fid) for fid in parsed if not is_valid_flat(topology, fid)]
    if stale:
        result.warnings.append(
            f"Flat Registry: {len(stale)} flat(s) not in the building layout: {', '.join(stale)}. "
            "They count toward block registrations but are not shown on the grid."
        )
    return result
