"""Generate a synthetic society-sheet export for demos."""

import pandas as pd
import random
import os

from models.block import load_topology
from engine.topology import iter_flat_ids
from config.defaults import BLOCK_LAYOUTS, PARKING_OPTIONS, BLOOD_GROUPS

FIRST_NAMES = ["Aarav", "Priya", "Rohan", "Ananya", "Vikram", "Sneha", "Arjun", "Kavya", "Rahul", "Meera"]
LAST_NAMES = ["Sharma", "Banerjee", "Iyer", "Gupta", "Das", "Mukherjee", "Reddy", "Sharan", "Nair", "Bose"]


def generate_registry_df(registration_share: float = 0.25) -> pd.DataFrame:
    """Generate society-sheet rows for a random share of the configured flats."""
    random.seed(42)
    rows = []
    for block in load_topology(BLOCK_LAYOUTS):
        for flat_id in reversed(list(iter_flat_ids(block))):
            if random.random() > registration_share:
                continue
            registered = random.random() > 0.15
            owner = f"{random.choice(FIRST_NAMES)} {random.choice(LAST_NAMES)}"
            rows.append({
                "Flat ID": str(flat_id),
                "Block": block.name,
                "Floor": str(flat_id.floor),
                "Flat": flat_id.letter,
                "Owner Name": owner if registered else "",
                "Contact Number": f"98{random.randint(10000000, 99999999)}" if registered else "",
                "Email": f"{owner.split()[0].lower()}.{str(flat_id).lower()}@example.com" if registered else "",
                "Family Members": str(random.randint(1, 6)) if registered else "",
                "Issues / Complaints": "",
                "Maintenance Status": random.choice(["paid", "paid", "pending", "overdue"]),
                "Registered": "TRUE" if registered else "FALSE",
                "Move In Month": f"{random.randint(2015, 2024)}-{random.randint(1, 12):02d}" if registered else "",
                "Emergency Contact": "",
                "Parking": random.choice(PARKING_OPTIONS) if registered else "",
                "Blood Group": random.choice(BLOOD_GROUPS) if registered else "",
                "Car Number": "",
                "Last Updated": "",
            })
    return pd.DataFrame(rows)


def generate_sample_csv(output_dir: str):
    """Write the sample registry CSV to the given directory."""
    os.makedirs(output_dir, exist_ok=True)
    generate_registry_df().to_csv(os.path.join(output_dir, "flat_registry.csv"), index=False)


if __name__ == "__main__":
    out = os.path.join(os.path.dirname(__file__), "..", "sample_files")
    generate_sample_csv(out)
    print("Sample registry CSV generated in sample_files/")
