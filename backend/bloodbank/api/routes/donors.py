"""Donors: registration and lookup."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bloodbank.api.deps import get_db
from bloodbank.schemas.donor import DonorCreate, DonorResponse
from bloodbank.services import registry_service

router = APIRouter()


@router.post("", response_model=DonorResponse, status_code=201)
def register_donor(data: DonorCreate, db: Session = Depends(get_db)):
    return registry_service.register_donor(
        db,
        name=data.name,
        age=data.age,
        gender=data.gender,
        blood_group=data.blood_group,
        contact=data.contact,
        address=data.address,
        last_donation_date=data.last_donation_date,
    )


@router.get("/{donor_id}", response_model=DonorResponse)
def get_donor(donor_id: int, db: Session = Depends(get_db)):
    return registry_service.get_donor(db, donor_id)
