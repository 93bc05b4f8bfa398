from sqlalchemy import Column, Integer, String, ForeignKey, Date, DateTime, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from bloodbank.db.base import Base


class Donation(Base):
    """Immutable once written. Each row was applied to BloodStock exactly once."""
    __tablename__ = "donations"
    __table_args__ = (
        CheckConstraint("units_donated > 0", name="ck_donation_units_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)
    donor_id = Column(Integer, ForeignKey("donors.id"), nullable=False, index=True)
    blood_group = Column(String(5), nullable=False)
    units_donated = Column(Integer, nullable=False)
    donation_date = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    donor = relationship("Donor", backref="donations")
