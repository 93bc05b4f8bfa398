"""Recipients: registration and lookup."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bloodbank.api.deps import get_db
from bloodbank.schemas.recipient import RecipientCreate, RecipientResponse
from bloodbank.services import registry_service

router = APIRouter()


@router.post("", response_model=RecipientResponse, status_code=201)
def register_recipient(data: RecipientCreate, db: Session = Depends(get_db)):
    return registry_service.register_recipient(
        db,
        name=data.name,
        age=data.age,
        gender=data.gender,
        blood_group_required=data.blood_group_required,
        contact=data.contact,
        address=data.address,
    )


@router.get("/{recipient_id}", response_model=RecipientResponse)
def get_recipient(recipient_id: int, db: Session = Depends(get_db)):
    return registry_service.get_recipient(db, recipient_id)
