from pydantic import BaseModel
from typing import Optional
from datetime import date


class DonationCreate(BaseModel):
    donor_id: int
    blood_group: str
    units: int
    donation_date: Optional[date] = None  # today when omitted


class DonationResponse(BaseModel):
    id: int
    donor_id: int
    blood_group: str
    units_donated: int
    donation_date: date

    class Config:
        from_attributes = True
