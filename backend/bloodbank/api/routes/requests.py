"""Blood requests: open, inspect, list pending, process."""
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bloodbank.api.deps import get_db
from bloodbank.schemas.blood_request import (
    PendingRequestRecord,
    ProcessResult,
    RequestCreate,
    RequestResponse,
)
from bloodbank.services import registry_service, request_service, stock_service

router = APIRouter()


@router.post("", response_model=RequestResponse, status_code=201)
def create_request(data: RequestCreate, db: Session = Depends(get_db)):
    return request_service.create_request(
        db,
        recipient_id=data.recipient_id,
        blood_group=data.blood_group,
        units=data.units,
        request_date=data.request_date,
    )


@router.get("/pending", response_model=List[PendingRequestRecord])
def list_pending_requests(db: Session = Depends(get_db)):
    """Pending requests only, oldest first."""
    return [PendingRequestRecord(**row._asdict()) for row in stock_service.pending_requests(db)]


@router.get("/{request_id}", response_model=RequestResponse)
def get_request(request_id: int, db: Session = Depends(get_db)):
    return registry_service.get_request(db, request_id)


@router.post("/{request_id}/process", response_model=ProcessResult)
def process_request(request_id: int, db: Session = Depends(get_db)):
    """Fulfill from stock or reject. Repeat calls return the final status unchanged."""
    status = request_service.process_request(db, request_id)
    return ProcessResult(request_id=request_id, status=status)
