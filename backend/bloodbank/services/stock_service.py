"""Stock rows per blood group: locked reads, guarded updates, and the read-only views.

Every mutation goes through `serialized`, which holds the blood group's
in-process lock for the whole transaction and retries when a conditional
UPDATE reports that another writer got there first.
"""
import logging
from datetime import date
from typing import Callable, List, NamedTuple, TypeVar

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bloodbank.core.config import settings
from bloodbank.core.exceptions import ConflictError, StockConflictError, ValidationError
from bloodbank.core.locks import stock_locks
from bloodbank.models.blood_request import BloodRequest
from bloodbank.models.blood_stock import BloodStock
from bloodbank.models.enums import RequestStatus
from bloodbank.models.recipient import Recipient
from bloodbank.services.validation import normalize_blood_group, require_non_negative

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StockLevel(NamedTuple):
    blood_group: str
    units: int


class PendingRequest(NamedTuple):
    request_id: int
    recipient_name: str
    blood_group: str
    units: int
    request_date: date


def serialized(db: Session, blood_group: str, operation: Callable[[], T]) -> T:
    """Run `operation` and commit, holding the blood group's lock throughout.

    ConflictError from the operation rolls back and re-runs it, up to
    FULFILLMENT_MAX_RETRIES extra attempts, then propagates. Any other error
    rolls back and propagates immediately.
    """
    attempts = settings.FULFILLMENT_MAX_RETRIES + 1
    last_conflict: ConflictError | None = None
    with stock_locks.hold(blood_group):
        for attempt in range(1, attempts + 1):
            try:
                result = operation()
                db.commit()
                return result
            except ConflictError as e:
                db.rollback()
                last_conflict = e
                logger.warning(f"Conflict on {blood_group} (attempt {attempt}/{attempts}): {e}")
            except Exception:
                db.rollback()
                raise
    raise last_conflict


def lock_stock_row(db: Session, blood_group: str) -> BloodStock | None:
    """SELECT ... FOR UPDATE on the group's row, refreshed from the database."""
    return (
        db.query(BloodStock)
        .filter(BloodStock.blood_group == blood_group)
        .with_for_update()
        .populate_existing()
        .first()
    )


def ensure_stock_row(db: Session, blood_group: str) -> BloodStock:
    """Return the group's row, inserting an empty one if none exists yet."""
    stock = lock_stock_row(db, blood_group)
    if stock is not None:
        return stock
    stock = BloodStock(blood_group=blood_group, units_available=0)
    db.add(stock)
    try:
        db.flush()
    except IntegrityError as e:
        # Another writer inserted the row between our read and our flush
        raise StockConflictError(blood_group, "stock row created concurrently") from e
    logger.info(f"Created stock row for {blood_group}")
    return stock


def increment_stock(db: Session, blood_group: str, units: int) -> None:
    """Add units to the group's row, creating the row when missing. Caller commits.

    The row may never exceed MAX_UNITS; a donation that would push it past
    is rejected as a ValidationError on `units`.
    """
    stock = ensure_stock_row(db, blood_group)
    headroom = settings.MAX_UNITS - units
    if stock.units_available > headroom:
        raise ValidationError(
            "units",
            f"Stock {blood_group} holds {stock.units_available}; adding {units} "
            f"would exceed {settings.MAX_UNITS}",
        )
    result = db.execute(
        update(BloodStock)
        .where(
            BloodStock.blood_group == blood_group,
            BloodStock.units_available <= headroom,
        )
        .values(units_available=BloodStock.units_available + units),
        execution_options={"synchronize_session": False},
    )
    if result.rowcount != 1:
        raise StockConflictError(blood_group, "stock changed during increment")


def decrement_stock(db: Session, blood_group: str, units: int) -> bool:
    """Take units only if at least that many remain. Caller commits.

    Returns False when the guard failed, i.e. the stock seen by the caller
    is no longer there.
    """
    result = db.execute(
        update(BloodStock)
        .where(
            BloodStock.blood_group == blood_group,
            BloodStock.units_available >= units,
        )
        .values(units_available=BloodStock.units_available - units),
        execution_options={"synchronize_session": False},
    )
    return result.rowcount == 1


def set_stock(db: Session, blood_group: str, units: int) -> StockLevel:
    """Overwrite a group's count. Used for initial seeding and stock takes."""
    blood_group = normalize_blood_group(blood_group)
    require_non_negative(units, "units_available")

    def apply() -> StockLevel:
        stock = ensure_stock_row(db, blood_group)
        previous = stock.units_available
        stock.units_available = units
        db.flush()
        logger.info(f"Stock {blood_group} set: {previous} -> {units}")
        return StockLevel(blood_group, units)

    return serialized(db, blood_group, apply)


def get_stock_level(db: Session, blood_group: str) -> StockLevel:
    """Committed count for one group; 0 when the group has no row."""
    blood_group = normalize_blood_group(blood_group)
    units = (
        db.query(BloodStock.units_available)
        .filter(BloodStock.blood_group == blood_group)
        .scalar()
    )
    return StockLevel(blood_group, units or 0)


def available_stock(db: Session) -> List[StockLevel]:
    """Every stock row ordered by blood group."""
    rows = (
        db.query(BloodStock.blood_group, BloodStock.units_available)
        .order_by(BloodStock.blood_group)
        .all()
    )
    return [StockLevel(bg, units) for bg, units in rows]


def pending_requests(db: Session) -> List[PendingRequest]:
    """Pending requests joined with the recipient's name, oldest first."""
    rows = (
        db.query(
            BloodRequest.id,
            Recipient.name,
            BloodRequest.blood_group,
            BloodRequest.units_requested,
            BloodRequest.request_date,
        )
        .join(Recipient, BloodRequest.recipient_id == Recipient.id)
        .filter(BloodRequest.status == RequestStatus.PENDING.value)
        .order_by(BloodRequest.request_date, BloodRequest.id)
        .all()
    )
    return [PendingRequest(*row) for row in rows]
