"""Maintenance ledger: billing periods, derived overdue status, payments."""

import calendar
import copy
import logging
from datetime import date
from typing import Dict, Iterable, List, Optional

from models.flat import FlatId, MaintenanceStatus
from models.maintenance import MaintenanceLedger, PaymentPeriod, PaymentUpdate
from config.defaults import DEFAULT_DUE_DAY

logger = logging.getLogger(__name__)


def month_label(year: int, month: int) -> str:
    return f"{calendar.month_name[month]} {year}"


def default_due_date(year: int, month: int) -> date:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(DEFAULT_DUE_DAY, last_day))


def create_period(
    ledger: MaintenanceLedger,
    flat_id: FlatId,
    month: str,
    due_date: Optional[date] = None,
) -> PaymentPeriod:
    """Open a pending period billed at the ledger's current default rate."""
    flat_ledger = ledger.for_flat(flat_id)
    if flat_ledger.has_month(month):
        raise ValueError(f"Flat {flat_id} already has a period for {month}.")

    period = PaymentPeriod(month=month, amount=ledger.default_rate, due_date=due_date)
    flat_ledger.pending.append(period)
    logger.info("Opened %s for flat %s at %s", month, flat_id, period.amount)
    return period


def open_month_for_flats(
    ledger: MaintenanceLedger,
    flat_ids: Iterable[FlatId],
    year: int,
    month: int,
) -> List[FlatId]:
    """Bill one month to many flats. Flats already billed for it are skipped."""
    label = month_label(year, month)
    due = default_due_date(year, month)
    billed = []
    for flat_id in flat_ids:
        if ledger.for_flat(flat_id).has_month(label):
            continue
        create_period(ledger, flat_id, label, due)
        billed.append(flat_id)
    return billed


def effective_status(period: PaymentPeriod, today: date) -> MaintenanceStatus:
    """Status as presented: a pending period past its due date reads as overdue."""
    if (
        period.status == MaintenanceStatus.PENDING
        and period.paid_date is None
        and period.due_date is not None
        and period.due_date < today
    ):
        return MaintenanceStatus.OVERDUE
    return period.status


def present_periods(ledger: MaintenanceLedger, flat_id: FlatId, today: date) -> List[PaymentPeriod]:
    """Copies of the flat's pending periods carrying their derived status."""
    presented = []
    flat_ledger = ledger.flats.get(flat_id)
    if flat_ledger is None:
        return []
    for period in flat_ledger.pending:
        p = copy.copy(period)
        p.status = effective_status(period, today)
        presented.append(p)
    return presented


def record_payment(
    ledger: MaintenanceLedger,
    flat_id: FlatId,
    month: str,
    update: PaymentUpdate,
) -> PaymentPeriod:
    """Settle a pending (or overdue) period and move it to the paid list."""
    flat_ledger = ledger.for_flat(flat_id)
    period = next((p for p in flat_ledger.pending if p.month == month), None)
    if period is None:
        if any(p.month == month for p in flat_ledger.paid):
            raise ValueError(f"{month} is already paid for flat {flat_id}.")
        raise ValueError(f"No pending period {month} for flat {flat_id}.")

    flat_ledger.pending.remove(period)
    paid = copy.copy(period)
    paid.status = MaintenanceStatus.PAID
    paid.paid_date = update.paid_date
    paid.paid_amount = update.paid_amount
    paid.payment_method = update.payment_method
    paid.transaction_id = update.transaction_id
    paid.notes = update.notes
    flat_ledger.paid.append(paid)
    logger.info("Flat %s paid %s (%s via %s)", flat_id, month, update.paid_amount, update.payment_method)
    return paid


def set_default_rate(ledger: MaintenanceLedger, amount: float) -> None:
    """Change the rate for periods created from now on."""
    if amount < 0:
        raise ValueError("Maintenance rate cannot be negative.")
    old = ledger.default_rate
    ledger.default_rate = amount
    logger.info("Default maintenance rate changed from %s to %s", old, amount)


def pending_total(ledger: MaintenanceLedger, flat_id: FlatId) -> float:
    flat_ledger = ledger.flats.get(flat_id)
    if flat_ledger is None:
        return 0
    return sum(p.amount for p in flat_ledger.pending)


def flat_maintenance_status(ledger: MaintenanceLedger, flat_id: FlatId, today: date) -> MaintenanceStatus:
    """Summary badge for a flat: worst status across its pending periods."""
    statuses = {p.status for p in present_periods(ledger, flat_id, today)}
    if MaintenanceStatus.OVERDUE in statuses:
        return MaintenanceStatus.OVERDUE
    if MaintenanceStatus.PENDING in statuses:
        return MaintenanceStatus.PENDING
    return MaintenanceStatus.PAID


def dues_status_by_flat(
    ledger: MaintenanceLedger,
    flat_ids: Iterable[FlatId],
    today: date,
) -> Dict[FlatId, MaintenanceStatus]:
    """Ledger-derived status for each flat that has ever been billed."""
    return {
        flat_id: flat_maintenance_status(ledger, flat_id, today)
        for flat_id in flat_ids if flat_id in ledger.flats
    }


def dues_summary(ledger: MaintenanceLedger, today: date) -> dict:
    """Society-wide outstanding dues."""
    pending_count = 0
    overdue_count = 0
    outstanding = 0.0
    flats_with_dues = 0
    for flat_id in ledger.flats:
        periods = present_periods(ledger, flat_id, today)
        if periods:
            flats_with_dues += 1
        for p in periods:
            outstanding += p.amount
            if p.status == MaintenanceStatus.OVERDUE:
                overdue_count += 1
            else:
                pending_count += 1
    return {
        "pending_periods": pending_count,
        "overdue_periods": overdue_count,
        "outstanding_amount": outstanding,
        "flats_with_dues": flats_with_dues,
    }


def dues_by_block(ledger: MaintenanceLedger, blocks: list, today: date) -> List[dict]:
    """Outstanding pending/overdue amounts grouped by block."""
    totals = {b.number: {"block": b.name, "pending_amount": 0.0, "overdue_amount": 0.0} for b in blocks}
    for flat_id in ledger.flats:
        row = totals.get(flat_id.block_number)
        if row is None:
            continue
        for p in present_periods(ledger, flat_id, today):
            key = "overdue_amount" if p.status == MaintenanceStatus.OVERDUE else "pending_amount"
            row[key] += p.amount
    return list(totals.values())
