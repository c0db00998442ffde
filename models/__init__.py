from models.block import Block, FloorRange, block_from_config, load_topology
from models.flat import FlatId, FlatRecord, MaintenanceStatus, SaveResult
from models.maintenance import FlatLedger, MaintenanceLedger, PaymentPeriod, PaymentUpdate
from models.session import ANONYMOUS, Identity
from models.audit import AuditEntry
