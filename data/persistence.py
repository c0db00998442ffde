"""Persistence adapters: the external system of record for flat records."""

import logging
from datetime import datetime
from typing import Dict, Optional

import requests

from models.flat import FlatId, FlatRecord, MaintenanceStatus, SaveResult
from config.defaults import SHEETDB_API_URL, SHEETDB_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


class PersistenceError(RuntimeError):
    """The external store could not be read."""


def _parse_timestamp(value) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


def _parse_month(value):
    if not value:
        return None
    try:
        return datetime.strptime(str(value).strip(), "%Y-%m").date()
    except ValueError:
        return None


def _parse_status(value) -> MaintenanceStatus:
    try:
        return MaintenanceStatus(str(value or "pending").strip().lower())
    except ValueError:
        return MaintenanceStatus.PENDING


def row_to_record(row: dict) -> FlatRecord:
    """Map a society-sheet row to a FlatRecord. Missing cells become blanks."""
    return FlatRecord(
        owner_name=row.get("Owner Name") or "",
        contact_number=str(row.get("Contact Number") or ""),
        email=row.get("Email") or "",
        family_members=str(row.get("Family Members") or ""),
        issues=row.get("Issues / Complaints") or "",
        registered=str(row.get("Registered", "")).strip().upper() == "TRUE",
        maintenance_status=_parse_status(row.get("Maintenance Status")),
        move_in_month=_parse_month(row.get("Move In Month")),
        emergency_contact_number=str(row.get("Emergency Contact") or ""),
        parking_allocation=row.get("Parking") or "",
        blood_group=row.get("Blood Group") or "",
        car_number=row.get("Car Number") or "",
        last_updated=_parse_timestamp(row.get("Last Updated")),
    )


def record_to_row(flat_id: FlatId, record: FlatRecord) -> dict:
    return {
        "Flat ID": str(flat_id),
        "Block": f"Block {flat_id.block_number}",
        "Floor": str(flat_id.floor),
        "Flat": flat_id.letter,
        "Owner Name": record.owner_name,
        "Contact Number": record.contact_number,
        "Email": record.email,
        "Family Members": record.family_members,
        "Issues / Complaints": record.issues,
        "Maintenance Status": record.maintenance_status.value,
        "Registered": "TRUE" if record.registered else "FALSE",
        "Move In Month": record.move_in_month.strftime("%Y-%m") if record.move_in_month else "",
        "Emergency Contact": record.emergency_contact_number,
        "Parking": record.parking_allocation,
        "Blood Group": record.blood_group,
        "Car Number": record.car_number,
        "Last Updated": (record.last_updated or datetime.now()).isoformat(),
    }


class FlatStore:
    """Interface consumed by the dashboard."""

    def fetch_all(self) -> Dict[FlatId, FlatRecord]:
        raise NotImplementedError

    def fetch_flat_record(self, flat_id: FlatId) -> Optional[FlatRecord]:
        raise NotImplementedError

    def save_flat_record(self, flat_id: FlatId, record: FlatRecord) -> SaveResult:
        raise NotImplementedError


class InMemoryFlatStore(FlatStore):
    """Process-local store, used offline and in tests."""

    def __init__(self, records: Optional[Dict[FlatId, FlatRecord]] = None):
        self._records: Dict[FlatId, FlatRecord] = dict(records or {})

    def fetch_all(self) -> Dict[FlatId, FlatRecord]:
        return dict(self._records)

    def fetch_flat_record(self, flat_id: FlatId) -> Optional[FlatRecord]:
        return self._records.get(flat_id)

    def save_flat_record(self, flat_id: FlatId, record: FlatRecord) -> SaveResult:
        self._records[flat_id] = record
        return SaveResult(True, "Details saved.")


class SheetDBFlatStore(FlatStore):
    """Flat records kept in a spreadsheet exposed through the SheetDB REST API."""

    def __init__(self, api_url: str = SHEETDB_API_URL, timeout: float = SHEETDB_TIMEOUT_SECONDS,
                 session: Optional[requests.Session] = None):
        if not api_url:
            raise ValueError("SheetDB API URL is not configured (set SHEETDB_API_URL).")
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _search(self, flat_id: FlatId) -> list:
        response = self.session.get(
            f"{self.api_url}/search",
            params={"Flat ID": str(flat_id), "casesensitive": "false"},
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()

    def fetch_all(self) -> Dict[FlatId, FlatRecord]:
        try:
            response = self.session.get(self.api_url, timeout=self.timeout)
            response.raise_for_status()
            rows = response.json()
        except requests.RequestException as e:
            logger.error("Failed to load flat data via SheetDB: %s", e, exc_info=True)
            raise PersistenceError(
                f"There was a problem connecting to the database (load flat data). Details: {e}"
            ) from e

        records: Dict[FlatId, FlatRecord] = {}
        for row in rows:
            raw_id = row.get("Flat ID")
            if not raw_id:
                continue
            try:
                flat_id = FlatId.parse(raw_id)
            except ValueError:
                logger.warning("Skipping sheet row with unreadable Flat ID %r", raw_id)
                continue
            records[flat_id] = row_to_record(row)
        return records

    def fetch_flat_record(self, flat_id: FlatId) -> Optional[FlatRecord]:
        try:
            rows = self._search(flat_id)
        except requests.RequestException as e:
            logger.error("Failed to fetch flat %s via SheetDB: %s", flat_id, e, exc_info=True)
            raise PersistenceError(
                f"There was a problem connecting to the database (fetch flat {flat_id}). Details: {e}"
            ) from e
        return row_to_record(rows[0]) if rows else None

    def save_flat_record(self, flat_id: FlatId, record: FlatRecord) -> SaveResult:
        row = record_to_row(flat_id, record)
        try:
            existing = self._search(flat_id)
            if existing:
                response = self.session.patch(
                    f"{self.api_url}/Flat ID/{flat_id}",
                    json=row,
                    timeout=self.timeout,
                )
            else:
                response = self.session.post(
                    self.api_url,
                    json={"data": [row]},
                    timeout=self.timeout,
                )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error("Failed to save flat %s via SheetDB: %s", flat_id, e, exc_info=True)
            return SaveResult(
                False,
                f"There was a problem connecting to the database (save data for flat {flat_id}). "
                f"Please try again later. Details: {e}",
            )
        logger.info("Flat %s saved to SheetDB", flat_id)
        return SaveResult(True, "Details updated successfully!")
