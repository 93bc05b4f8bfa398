from sqlalchemy import Column, Integer, String, DateTime, CheckConstraint
from sqlalchemy.sql import func
from bloodbank.db.base import Base


class BloodStock(Base):
    """
    Authoritative unit count for one blood group.

    Exactly one row per group. The CHECK constraint is the last line of
    defence; stock_service never issues a decrement that could cross zero.
    """
    __tablename__ = "blood_stock"
    __table_args__ = (
        CheckConstraint("units_available >= 0", name="ck_stock_units_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    blood_group = Column(String(5), nullable=False, unique=True)
    units_available = Column(Integer, nullable=False, default=0)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
