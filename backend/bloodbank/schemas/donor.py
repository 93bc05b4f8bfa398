from pydantic import BaseModel
from typing import Optional
from datetime import date


class DonorCreate(BaseModel):
    name: str
    age: int
    gender: str
    blood_group: str
    contact: str
    address: Optional[str] = None
    last_donation_date: Optional[date] = None


class DonorResponse(BaseModel):
    id: int
    name: str
    age: int
    gender: str
    blood_group: str
    contact: str
    address: Optional[str] = None
    last_donation_date: Optional[date] = None

    class Config:
        from_attributes = True
