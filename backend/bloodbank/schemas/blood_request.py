from pydantic import BaseModel
from typing import Optional
from datetime import date, datetime

from bloodbank.models.enums import RequestStatus


class RequestCreate(BaseModel):
    recipient_id: int
    blood_group: str
    units: int
    request_date: Optional[date] = None  # today when omitted


class RequestResponse(BaseModel):
    id: int
    recipient_id: int
    blood_group: str
    units_requested: int
    request_date: date
    status: RequestStatus
    processed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProcessResult(BaseModel):
    request_id: int
    status: RequestStatus


class PendingRequestRecord(BaseModel):
    request_id: int
    recipient_name: str
    blood_group: str
    units: int
    request_date: date
