"""Seed the blood bank with a small demo data set.

Every write goes through the services, so the demo data obeys the same
rules as live traffic: the final stock is O+ 5, A- 3, B+ 4 after the sample
donations and the one completed request have been applied.
"""
from datetime import date

from bloodbank.db.init_db import init_db
from bloodbank.db.session import SessionLocal
from bloodbank.models.donor import Donor
from bloodbank.services import registry_service, request_service, stock_service
from bloodbank.services.donation_service import record_donation

DONORS = [
    {"name": "Rahul Sharma", "age": 28, "gender": "Male", "blood_group": "O+",
     "contact": "9876543210", "address": "Delhi", "last_donation_date": date(2025, 7, 20)},
    {"name": "Priya Mehta", "age": 32, "gender": "Female", "blood_group": "A-",
     "contact": "9876501234", "address": "Mumbai", "last_donation_date": date(2025, 6, 15)},
    {"name": "Arjun Verma", "age": 24, "gender": "Male", "blood_group": "B+",
     "contact": "9876556789", "address": "Bangalore", "last_donation_date": date(2025, 5, 10)},
]

RECIPIENTS = [
    {"name": "Amit Verma", "age": 40, "gender": "Male", "blood_group_required": "O+",
     "contact": "9876554321", "address": "Delhi"},
    {"name": "Neha Gupta", "age": 29, "gender": "Female", "blood_group_required": "B+",
     "contact": "9876512345", "address": "Kolkata"},
]

# Opening stock before the sample donations and the completed B+ request
OPENING_STOCK = {"O+": 3, "A-": 2, "B+": 5}

# (donor index, blood group, units, date)
DONATIONS = [
    (0, "O+", 2, date(2025, 7, 20)),
    (1, "A-", 1, date(2025, 6, 15)),
]

# (recipient index, blood group, units, date, process now)
REQUESTS = [
    (0, "O+", 2, date(2025, 8, 10), False),
    (1, "B+", 1, date(2025, 8, 9), True),
]


def seed_bloodbank():
    init_db()
    db = SessionLocal()
    try:
        if db.query(Donor).count() > 0:
            print("Database already has donors, skipping seed.")
            return

        donors = [registry_service.register_donor(db, **d) for d in DONORS]
        recipients = [registry_service.register_recipient(db, **r) for r in RECIPIENTS]
        print(f"Registered {len(donors)} donors and {len(recipients)} recipients")

        for blood_group, units in OPENING_STOCK.items():
            stock_service.set_stock(db, blood_group, units)

        for donor_index, blood_group, units, when in DONATIONS:
            record_donation(db, donors[donor_index].id, blood_group, units, when)

        for recipient_index, blood_group, units, when, process_now in REQUESTS:
            req = request_service.create_request(db, recipients[recipient_index].id, blood_group, units, when)
            if process_now:
                status = request_service.process_request(db, req.id)
                print(f"Request {req.id} -> {status.value}")

        print("\nStock after seeding:")
        for level in stock_service.available_stock(db):
            print(f"  {level.blood_group:<4} {level.units}")
        print(f"Pending requests: {len(stock_service.pending_requests(db))}")
    finally:
        db.close()


if __name__ == "__main__":
    seed_bloodbank()
