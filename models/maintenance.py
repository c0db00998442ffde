from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

from models.flat import FlatId, MaintenanceStatus
from config.defaults import DEFAULT_MAINTENANCE_RATE


@dataclass
class PaymentPeriod:
    month: str                       # e.g. "January 2025", unique per flat
    amount: float
    due_date: Optional[date] = None
    paid_date: Optional[date] = None
    status: MaintenanceStatus = MaintenanceStatus.PENDING  # only pending/paid are stored
    payment_method: Optional[str] = None
    paid_amount: Optional[float] = None
    transaction_id: Optional[str] = None
    notes: Optional[str] = None


@dataclass
class PaymentUpdate:
    """Details captured when a period is marked as paid."""
    payment_method: str
    paid_amount: float
    paid_date: date
    transaction_id: Optional[str] = None
    notes: Optional[str] = None


@dataclass
class FlatLedger:
    pending: List[PaymentPeriod] = field(default_factory=list)
    paid: List[PaymentPeriod] = field(default_factory=list)

    def has_month(self, month: str) -> bool:
        return any(p.month == month for p in self.pending) or any(p.month == month for p in self.paid)


@dataclass
class MaintenanceLedger:
    default_rate: float = DEFAULT_MAINTENANCE_RATE
    flats: Dict[FlatId, FlatLedger] = field(default_factory=dict)

    def for_flat(self, flat_id: FlatId) -> FlatLedger:
        """Return the flat's ledger, creating an empty one on first use."""
        if flat_id not in self.flats:
            self.flats[flat_id] = FlatLedger()
        return self.flats[flat_id]
