"""Donations. Recording one increases stock in the same transaction."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bloodbank.api.deps import get_db
from bloodbank.schemas.donation import DonationCreate, DonationResponse
from bloodbank.services.donation_service import record_donation

router = APIRouter()


@router.post("", response_model=DonationResponse, status_code=201)
def create_donation(data: DonationCreate, db: Session = Depends(get_db)):
    return record_donation(
        db,
        donor_id=data.donor_id,
        blood_group=data.blood_group,
        units=data.units,
        donation_date=data.donation_date,
    )
