"""
Reports API: read-only dashboard data.
- Donors overdue for a donation
- Low stock blood groups
- Units donated per group
- Total units in the bank
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from bloodbank.api.deps import get_db
from bloodbank.schemas.stock import (
    DonationTotalRecord,
    InactiveDonorRecord,
    StockRecord,
    TotalUnitsRecord,
)
from bloodbank.services import report_service

router = APIRouter()


@router.get("/inactive-donors", response_model=List[InactiveDonorRecord])
def inactive_donors(
    months: Optional[int] = Query(None, ge=0, description="No donation for more than N months"),
    db: Session = Depends(get_db),
):
    return [InactiveDonorRecord(**row._asdict()) for row in report_service.inactive_donors(db, months)]


@router.get("/low-stock", response_model=List[StockRecord])
def low_stock(
    threshold: Optional[int] = Query(None, ge=0, description="Groups with fewer units than this"),
    db: Session = Depends(get_db),
):
    return [StockRecord(**row._asdict()) for row in report_service.low_stock(db, threshold)]


@router.get("/donation-totals", response_model=List[DonationTotalRecord])
def donation_totals(db: Session = Depends(get_db)):
    return [DonationTotalRecord(**row._asdict()) for row in report_service.donation_totals(db)]


@router.get("/total-units", response_model=TotalUnitsRecord)
def total_units(db: Session = Depends(get_db)):
    return TotalUnitsRecord(total_units=report_service.total_units(db))
