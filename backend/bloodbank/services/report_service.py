"""
Reports for the blood bank dashboard:
- Donors who have not donated recently
- Blood groups running low
- Units donated per blood group
- Total units in the bank
"""
import calendar
from datetime import date
from typing import List, NamedTuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from bloodbank.core.config import settings
from bloodbank.models.blood_stock import BloodStock
from bloodbank.models.donation import Donation
from bloodbank.models.donor import Donor
from bloodbank.services.stock_service import StockLevel


class InactiveDonor(NamedTuple):
    donor_id: int
    name: str
    contact: str
    blood_group: str
    last_donation_date: date


class DonationTotal(NamedTuple):
    blood_group: str
    total_units: int


def months_before(day: date, months: int) -> date:
    """Same day N calendar months earlier, clamped to the month's last day."""
    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def inactive_donors(db: Session, months: int | None = None, today: date | None = None) -> List[InactiveDonor]:
    """Donors whose last recorded donation is more than `months` ago.

    Donors with no donation date on file are not included.
    """
    months = settings.INACTIVE_DONOR_MONTHS if months is None else months
    cutoff = months_before(today or date.today(), months)
    rows = (
        db.query(Donor.id, Donor.name, Donor.contact, Donor.blood_group, Donor.last_donation_date)
        .filter(Donor.last_donation_date.isnot(None), Donor.last_donation_date < cutoff)
        .order_by(Donor.last_donation_date, Donor.id)
        .all()
    )
    return [InactiveDonor(*row) for row in rows]


def low_stock(db: Session, threshold: int | None = None) -> List[StockLevel]:
    """Groups with fewer than `threshold` units, emptiest first."""
    threshold = settings.LOW_STOCK_THRESHOLD if threshold is None else threshold
    rows = (
        db.query(BloodStock.blood_group, BloodStock.units_available)
        .filter(BloodStock.units_available < threshold)
        .order_by(BloodStock.units_available.asc(), BloodStock.blood_group)
        .all()
    )
    return [StockLevel(bg, units) for bg, units in rows]


def donation_totals(db: Session) -> List[DonationTotal]:
    rows = (
        db.query(Donation.blood_group, func.sum(Donation.units_donated))
        .group_by(Donation.blood_group)
        .order_by(Donation.blood_group)
        .all()
    )
    return [DonationTotal(bg, int(total or 0)) for bg, total in rows]


def total_units(db: Session) -> int:
    return int(db.query(func.sum(BloodStock.units_available)).scalar() or 0)
