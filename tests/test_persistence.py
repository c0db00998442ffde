"""Tests for the persistence adapters."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import date, datetime
from unittest.mock import MagicMock

import pytest
import requests

from models.flat import FlatId, FlatRecord, MaintenanceStatus
from data.persistence import (
    InMemoryFlatStore,
    SheetDBFlatStore,
    PersistenceError,
    row_to_record,
    record_to_row,
)

API = "https://sheetdb.example/api/v1/abc"


def make_response(payload=None, status_ok=True):
    response = MagicMock()
    response.json.return_value = payload if payload is not None else []
    if not status_ok:
        response.raise_for_status.side_effect = requests.HTTPError("500 Server Error")
    return response


def make_store(session):
    return SheetDBFlatStore(API, timeout=5, session=session)


def make_row(flat_id="1A3", registered="TRUE"):
    return {
        "Flat ID": flat_id,
        "Owner Name": "Asha Das",
        "Contact Number": "9876543210",
        "Email": "asha@example.com",
        "Family Members": "4",
        "Issues / Complaints": "Leaking tap",
        "Maintenance Status": "Overdue",
        "Registered": registered,
        "Move In Month": "2021-06",
        "Last Updated": "2025-01-10T09:30:00Z",
    }


class TestRowMapping:
    def test_row_to_record(self):
        record = row_to_record(make_row())
        assert record.owner_name == "Asha Das"
        assert record.registered is True
        assert record.maintenance_status == MaintenanceStatus.OVERDUE
        assert record.move_in_month == date(2021, 6, 1)
        assert record.last_updated.year == 2025

    def test_missing_cells_default(self):
        record = row_to_record({"Flat ID": "1A3"})
        assert record.owner_name == ""
        assert record.registered is False
        assert record.maintenance_status == MaintenanceStatus.PENDING
        assert record.move_in_month is None

    def test_unknown_status_reads_as_pending(self):
        assert row_to_record({"Maintenance Status": "late"}).maintenance_status == MaintenanceStatus.PENDING

    def test_record_to_row(self):
        record = FlatRecord(owner_name="Asha", registered=True, last_updated=datetime(2025, 1, 10))
        row = record_to_row(FlatId("1", "A", 3), record)
        assert row["Flat ID"] == "1A3"
        assert row["Block"] == "Block 1"
        assert row["Floor"] == "3"
        assert row["Flat"] == "A"
        assert row["Registered"] == "TRUE"
        assert row["Maintenance Status"] == "pending"


class TestInMemoryStore:
    def test_save_and_fetch(self):
        store = InMemoryFlatStore()
        flat_id = FlatId("1", "A", 3)
        assert store.fetch_flat_record(flat_id) is None
        assert store.save_flat_record(flat_id, FlatRecord(owner_name="Asha")).success
        assert store.fetch_all()[flat_id].owner_name == "Asha"


class TestSheetDBStore:
    def test_requires_url(self):
        with pytest.raises(ValueError):
            SheetDBFlatStore("")

    def test_fetch_all_normalizes_ids(self):
        session = MagicMock()
        session.get.return_value = make_response([
            make_row("Block 1-3A"),
            make_row("2b5", registered="FALSE"),
            {"Owner Name": "no id"},
            make_row("garbage"),
        ])
        records = make_store(session).fetch_all()
        assert list(records) == [FlatId("1", "A", 3), FlatId("2", "B", 5)]
        assert records[FlatId("2", "B", 5)].registered is False

    def test_fetch_all_failure_raises(self):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("offline")
        with pytest.raises(PersistenceError, match="load flat data"):
            make_store(session).fetch_all()

    def test_fetch_flat_record_not_found(self):
        session = MagicMock()
        session.get.return_value = make_response([])
        assert make_store(session).fetch_flat_record(FlatId("1", "A", 3)) is None
        _, kwargs = session.get.call_args
        assert kwargs["params"]["Flat ID"] == "1A3"

    def test_save_existing_row_patches(self):
        session = MagicMock()
        session.get.return_value = make_response([make_row()])
        session.patch.return_value = make_response()

        result = make_store(session).save_flat_record(FlatId("1", "A", 3), FlatRecord(registered=True))

        assert result.success
        session.patch.assert_called_once()
        args, kwargs = session.patch.call_args
        assert args[0] == f"{API}/Flat ID/1A3"
        assert kwargs["json"]["Registered"] == "TRUE"
        session.post.assert_not_called()

    def test_save_new_row_posts(self):
        session = MagicMock()
        session.get.return_value = make_response([])
        session.post.return_value = make_response()

        result = make_store(session).save_flat_record(FlatId("1", "A", 3), FlatRecord())

        assert result.success
        _, kwargs = session.post.call_args
        assert kwargs["json"]["data"][0]["Flat ID"] == "1A3"
        session.patch.assert_not_called()

    def test_save_failure_returns_message(self):
        session = MagicMock()
        session.get.return_value = make_response([])
        session.post.return_value = make_response(status_ok=False)

        result = make_store(session).save_flat_record(FlatId("1", "A", 3), FlatRecord())

        assert not result.success
        assert "save data for flat 1A3" in result.message


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
