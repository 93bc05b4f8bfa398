"""Donor and recipient registration plus id lookups."""
import logging
from datetime import date

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bloodbank.core.exceptions import NotFoundError, ValidationError
from bloodbank.models.blood_request import BloodRequest
from bloodbank.models.donor import Donor
from bloodbank.models.recipient import Recipient
from bloodbank.services.validation import (
    clean_address,
    clean_contact,
    clean_gender,
    clean_name,
    normalize_blood_group,
    require_not_future,
)

logger = logging.getLogger(__name__)

MIN_DONOR_AGE = 18


def _check_age(age: int, minimum: int, message: str) -> int:
    if isinstance(age, bool) or not isinstance(age, int):
        raise ValidationError("age", "Age must be a whole number")
    if age < minimum:
        raise ValidationError("age", message)
    return age


def _ensure_contact_free(db: Session, model, contact: str) -> None:
    if db.query(model.id).filter(model.contact == contact).first() is not None:
        raise ValidationError("contact", f"Contact {contact} is already registered")


def _commit_new(db: Session, obj):
    db.add(obj)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        # The up-front check passed, so a concurrent registration took the contact
        raise ValidationError("contact", f"Contact {obj.contact} is already registered") from e
    db.refresh(obj)
    return obj


def register_donor(
    db: Session,
    name: str,
    age: int,
    gender: str,
    blood_group: str,
    contact: str,
    address: str | None = None,
    last_donation_date: date | None = None,
) -> Donor:
    """Create a donor. Contact must be unique; donors must be adults.

    Raises:
        ValidationError: naming the first field that fails its constraint
    """
    donor = Donor(
        name=clean_name(name),
        age=_check_age(age, MIN_DONOR_AGE, f"Donor must be at least {MIN_DONOR_AGE} years old"),
        gender=clean_gender(gender),
        blood_group=normalize_blood_group(blood_group),
        contact=clean_contact(contact),
        address=clean_address(address),
        last_donation_date=(
            require_not_future(last_donation_date, "last_donation_date")
            if last_donation_date is not None
            else None
        ),
    )
    _ensure_contact_free(db, Donor, donor.contact)
    donor = _commit_new(db, donor)
    logger.info(f"Registered donor {donor.id} ({donor.blood_group})")
    return donor


def register_recipient(
    db: Session,
    name: str,
    age: int,
    gender: str,
    blood_group_required: str,
    contact: str,
    address: str | None = None,
) -> Recipient:
    recipient = Recipient(
        name=clean_name(name),
        age=_check_age(age, 1, "Age must be greater than 0"),
        gender=clean_gender(gender),
        blood_group_required=normalize_blood_group(blood_group_required, field="blood_group_required"),
        contact=clean_contact(contact),
        address=clean_address(address),
    )
    _ensure_contact_free(db, Recipient, recipient.contact)
    recipient = _commit_new(db, recipient)
    logger.info(f"Registered recipient {recipient.id} (needs {recipient.blood_group_required})")
    return recipient


def get_donor(db: Session, donor_id: int) -> Donor:
    donor = db.query(Donor).filter(Donor.id == donor_id).first()
    if not donor:
        raise NotFoundError("Donor", donor_id)
    return donor


def get_recipient(db: Session, recipient_id: int) -> Recipient:
    recipient = db.query(Recipient).filter(Recipient.id == recipient_id).first()
    if not recipient:
        raise NotFoundError("Recipient", recipient_id)
    return recipient


def get_request(db: Session, request_id: int) -> BloodRequest:
    request = db.query(BloodRequest).filter(BloodRequest.id == request_id).first()
    if not request:
        raise NotFoundError("Request", request_id)
    return request
