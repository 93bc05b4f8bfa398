from pydantic import BaseModel
from datetime import date


class StockRecord(BaseModel):
    blood_group: str
    units: int


class StockUpdate(BaseModel):
    units: int


class InactiveDonorRecord(BaseModel):
    donor_id: int
    name: str
    contact: str
    blood_group: str
    last_donation_date: date


class DonationTotalRecord(BaseModel):
    blood_group: str
    total_units: int


class TotalUnitsRecord(BaseModel):
    total_units: int
