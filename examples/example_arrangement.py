"""Example: Build a small hall, import guests and arrange them."""

import logging
import os

from dotenv import load_dotenv

from seatplan import FileBackend, LayoutConfig, SeatingSession

# Load SEATPLAN_* overrides from a .env file
load_dotenv()

logging.basicConfig(level=logging.INFO)

STORAGE_DIR = os.getenv("SEATPLAN_STORAGE_DIR", ".seatplan")

session = SeatingSession(
    config=LayoutConfig.from_env(dotenv=False),
    backend=FileBackend(STORAGE_DIR),
)

print("=== Seat Arrangement ===\n")

# Layout: stage plus two rows of six seats centered under it
session.toggle_main_stage()
result = session.add_seat_batch(1275, 400, rows=2, cols=6)
if not result:
    print(f"Could not place seats: {result.message}")
    exit(1)
print(f"1. Placed {len(result.seat_ids)} seats")

session.import_people(
    [
        {"name": "Alex Park", "title": "Prime Minister", "category": "Heads of Government"},
        {"name": "Sam Lee", "title": "Mayor", "category": "Mayors"},
        {"name": "Jo Kim", "title": "Member", "category": "Legislators"},
        {"name": "Riley Cho", "title": "Coordinator", "category": "Event Staff"},
    ],
    apply_category_weights=True,
)
print(f"2. Imported {len(session.roster)} people")

arrangement = session.arrange_by_position()
print(f"3. Seated {arrangement.assigned_count} people\n")

for row in session.report():
    print(f"   Seat {row.seat_label:>3}: {row.person_name} ({row.person_title})")

session.save("example")
print(f"\nSaved project to {STORAGE_DIR}")

print("\n=== Done ===")
