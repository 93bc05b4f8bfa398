from pydantic import BaseModel
from typing import Optional


class RecipientCreate(BaseModel):
    name: str
    age: int
    gender: str
    blood_group_required: str
    contact: str
    address: Optional[str] = None


class RecipientResponse(BaseModel):
    id: int
    name: str
    age: int
    gender: str
    blood_group_required: str
    contact: str
    address: Optional[str] = None

    class Config:
        from_attributes = True
