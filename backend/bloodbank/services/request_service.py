"""
Blood requests: creation and fulfillment.

Fulfillment is a single check-then-act step under the blood group's lock:
read stock, then either take the units and mark the request Completed or
mark it Rejected. Both the decrement and the status change are conditional
UPDATEs, so a writer outside this process can only make us retry, never
push stock below zero or finalize a request twice.
"""
import logging
from datetime import date

from sqlalchemy import update
from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from bloodbank.core.exceptions import ConflictError, StockConflictError
from bloodbank.models.blood_request import BloodRequest
from bloodbank.models.enums import RequestStatus
from bloodbank.services.registry_service import get_recipient, get_request
from bloodbank.services.stock_service import decrement_stock, lock_stock_row, serialized
from bloodbank.services.validation import (
    normalize_blood_group,
    require_not_future,
    require_positive,
)

logger = logging.getLogger(__name__)


def create_request(
    db: Session,
    recipient_id: int,
    blood_group: str,
    units: int,
    request_date: date | None = None,
) -> BloodRequest:
    """Open a Pending request. The group may differ from the recipient's own (compatible units)."""
    blood_group = normalize_blood_group(blood_group)
    require_positive(units, "units_requested")
    request_date = require_not_future(request_date or date.today(), "request_date")
    get_recipient(db, recipient_id)

    request = BloodRequest(
        recipient_id=recipient_id,
        blood_group=blood_group,
        units_requested=units,
        request_date=request_date,
        status=RequestStatus.PENDING.value,
    )
    db.add(request)
    db.commit()
    db.refresh(request)
    logger.info(f"Request {request.id}: recipient {recipient_id} needs {units} unit(s) of {blood_group}")
    return request


def process_request(db: Session, request_id: int) -> RequestStatus:
    """Fulfill or reject a pending request.

    Already Completed/Rejected requests are returned as-is without touching
    stock, so calling this twice is safe.

    Raises:
        NotFoundError: unknown request id
        StockConflictError: lost the race for the stock row on every retry
    """
    blood_group = get_request(db, request_id).blood_group

    def evaluate() -> RequestStatus:
        request = (
            db.query(BloodRequest)
            .filter(BloodRequest.id == request_id)
            .with_for_update()
            .populate_existing()
            .first()
        )
        current = RequestStatus(request.status)
        if current.is_terminal:
            return current

        stock = lock_stock_row(db, blood_group)
        available = stock.units_available if stock is not None else 0
        units = request.units_requested

        if available >= units:
            if not decrement_stock(db, blood_group, units):
                raise StockConflictError(blood_group)
            outcome = RequestStatus.COMPLETED
        else:
            outcome = RequestStatus.REJECTED

        _finalize(db, request_id, outcome)
        logger.info(
            f"Request {request_id} {outcome.value}: {units} unit(s) of {blood_group}, "
            f"{available} available"
        )
        return outcome

    return serialized(db, blood_group, evaluate)


def _finalize(db: Session, request_id: int, outcome: RequestStatus) -> None:
    """Pending -> outcome, only if still Pending."""
    result = db.execute(
        update(BloodRequest)
        .where(
            BloodRequest.id == request_id,
            BloodRequest.status == RequestStatus.PENDING.value,
        )
        .values(status=outcome.value, processed_at=func.now()),
        execution_options={"synchronize_session": False},
    )
    if result.rowcount != 1:
        # Finalized by someone else; rolling back also undoes our decrement
        raise ConflictError(f"request {request_id}", "already processed concurrently")
