"""File upload parsing — society sheet exports (CSV/XLSX) into a flat registry."""

import pandas as pd
from typing import Dict
from models.flat import FlatId, FlatRecord
from data.persistence import row_to_record


def parse_registry(df: pd.DataFrame) -> Dict[FlatId, FlatRecord]:
    """Convert a society-sheet DataFrame into a registry, keeping row order.

    Rows without a readable Flat ID are skipped; run validate_registry first
    to report them.
    """
    clean = df.astype(object).where(pd.notna(df), None)
    registry: Dict[FlatId, FlatRecord] = {}
    for row in clean.to_dict("records"):
        raw_id = row.get("Flat ID")
        if not raw_id:
            continue
        try:
            flat_id = FlatId.parse(raw_id)
        except ValueError:
            continue
        registry[flat_id] = row_to_record(row)
    return registry


def load_file(uploaded_file) -> pd.DataFrame:
    """Load an uploaded file (CSV or XLSX) into a DataFrame of strings."""
    name = uploaded_file.name.lower()
    if name.endswith(".csv"):
        return pd.read_csv(uploaded_file, dtype=str)
    elif name.endswith(".xlsx") or name.endswith(".xls"):
        return pd.read_excel(uploaded_file, engine="openpyxl", dtype=str)
    else:
        raise ValueError(f"Unsupported file format: {name}. Use CSV or XLSX.")
