from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class AuditEntry:
    timestamp: datetime
    action: str              # "save", "payment", "billing", "rate_change", "upload", "rollback"
    actor: str               # role of the acting identity
    flat_id: Optional[str]
    field_changed: str
    old_value: str
    new_value: str
    note: str = ""
