from sqlalchemy import Column, Integer, String, CheckConstraint
from bloodbank.db.base import Base


class Recipient(Base):
    __tablename__ = "recipients"
    __table_args__ = (
        CheckConstraint("age > 0", name="ck_recipient_age_positive"),
        CheckConstraint("gender IN ('Male', 'Female', 'Other')", name="ck_recipient_gender"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    age = Column(Integer, nullable=False)
    gender = Column(String(10), nullable=False)
    blood_group_required = Column(String(5), nullable=False)
    contact = Column(String(15), nullable=False, unique=True)
    address = Column(String(255), nullable=True)
