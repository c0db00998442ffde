"""Default configuration constants for the Society Dashboard."""

import os

SOCIETY_NAME = "Hijibiji Society"

# Block layouts. Each block uses exactly one of:
#   "flats_per_floor": letters applied to every floor
#   "floor_ranges":    [(start, end, letters), ...] inclusive, non-overlapping
BLOCK_LAYOUTS = {
    "Block 1": {"floors": 12, "flats_per_floor": ["A", "B", "C", "D", "E"]},
    "Block 2": {"floors": 12, "flats_per_floor": ["A", "B", "C", "D"]},
    "Block 3": {"floors": 12, "flats_per_floor": ["A", "B", "C", "D", "E"]},
    "Block 4": {"floors": 12, "flats_per_floor": ["A", "B", "C", "D", "E"]},
    "Block 5": {"floors": 12, "flats_per_floor": ["A", "B", "C", "D", "E"]},
    "Block 6": {"floors": 12, "flats_per_floor": ["A", "B", "C", "D"]},
}

# Maintenance
DEFAULT_MAINTENANCE_RATE = 250
DEFAULT_DUE_DAY = 5  # Day of the billed month the payment falls due
MAINTENANCE_STATUSES = ["paid", "pending", "overdue"]
PAYMENT_METHODS = ["cash", "upi", "bank_transfer", "cheque"]

# Flat profile options
PARKING_OPTIONS = ["Covered", "Open", "No Parking"]
BLOOD_GROUPS = ["A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-"]

# Roles reported by the identity provider
ROLES = ["anonymous", "owner", "admin"]

# Persistence
SHEETDB_API_URL = os.environ.get("SHEETDB_API_URL", "")
SHEETDB_TIMEOUT_SECONDS = 10

# Logging
LOG_LEVEL = os.environ.get("SOCIETY_LOG_LEVEL", "INFO")
