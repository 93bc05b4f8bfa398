from sqlalchemy import Column, Integer, String, Date, CheckConstraint
from bloodbank.db.base import Base


class Donor(Base):
    """
    Registered blood donor.

    Only last_donation_date changes after registration, and only through
    donation_service.record_donation.
    """
    __tablename__ = "donors"
    __table_args__ = (
        CheckConstraint("age >= 18", name="ck_donor_age_adult"),
        CheckConstraint("gender IN ('Male', 'Female', 'Other')", name="ck_donor_gender"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    age = Column(Integer, nullable=False)
    gender = Column(String(10), nullable=False)
    blood_group = Column(String(5), nullable=False, index=True)
    contact = Column(String(15), nullable=False, unique=True)
    address = Column(String(255), nullable=True)
    last_donation_date = Column(Date, nullable=True)
