"""Donation recording. Inserting a donation and increasing stock are one transaction."""
import logging
from datetime import date

from sqlalchemy.orm import Session

from bloodbank.core.exceptions import ValidationError
from bloodbank.models.donation import Donation
from bloodbank.models.donor import Donor
from bloodbank.services.registry_service import get_donor
from bloodbank.services.stock_service import increment_stock, serialized
from bloodbank.services.validation import (
    normalize_blood_group,
    require_not_future,
    require_positive,
)

logger = logging.getLogger(__name__)


def record_donation(
    db: Session,
    donor_id: int,
    blood_group: str,
    units: int,
    donation_date: date | None = None,
) -> Donation:
    """Append a donation and add its units to the blood group's stock.

    The stock row is created on the first donation for a group. The
    donor's last donation date moves forward, never back. Donations have
    no update or delete path, so each one is applied to stock once.

    Args:
        db: Database session
        donor_id: Registered donor
        blood_group: Must match the donor's blood group
        units: Units donated, > 0
        donation_date: Defaults to today; may not be in the future

    Raises:
        ValidationError: bad units, date or blood group
        NotFoundError: unknown donor
        StockConflictError: stock row kept changing under us past the retry budget
    """
    blood_group = normalize_blood_group(blood_group)
    require_positive(units, "units")
    donation_date = require_not_future(donation_date or date.today(), "donation_date")

    donor = get_donor(db, donor_id)
    if donor.blood_group != blood_group:
        raise ValidationError(
            "blood_group",
            f"Donor {donor_id} is {donor.blood_group}, cannot donate {blood_group}",
        )

    def apply() -> Donation:
        donation = Donation(
            donor_id=donor_id,
            blood_group=blood_group,
            units_donated=units,
            donation_date=donation_date,
        )
        db.add(donation)
        increment_stock(db, blood_group, units)
        _advance_last_donation(db, donor_id, donation_date)
        db.flush()
        return donation

    donation = serialized(db, blood_group, apply)
    db.refresh(donation)
    logger.info(
        f"Donation {donation.id}: donor {donor_id} gave {units} unit(s) of {blood_group}"
    )
    return donation


def _advance_last_donation(db: Session, donor_id: int, donation_date: date) -> None:
    donor = db.query(Donor).filter(Donor.id == donor_id).populate_existing().first()
    if donor.last_donation_date is None or donation_date > donor.last_donation_date:
        donor.last_donation_date = donation_date
