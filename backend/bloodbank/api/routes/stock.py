"""Stock levels per blood group."""
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bloodbank.api.deps import get_db
from bloodbank.schemas.stock import StockRecord, StockUpdate
from bloodbank.services import stock_service

router = APIRouter()


@router.get("", response_model=List[StockRecord])
def list_stock(db: Session = Depends(get_db)):
    return [StockRecord(**row._asdict()) for row in stock_service.available_stock(db)]


@router.get("/{blood_group}", response_model=StockRecord)
def get_stock(blood_group: str, db: Session = Depends(get_db)):
    return StockRecord(**stock_service.get_stock_level(db, blood_group)._asdict())


@router.put("/{blood_group}", response_model=StockRecord)
def set_stock(blood_group: str, data: StockUpdate, db: Session = Depends(get_db)):
    """Overwrite the count after a physical stock take."""
    return StockRecord(**stock_service.set_stock(db, blood_group, data.units)._asdict())
