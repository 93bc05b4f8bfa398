"""
BloodRequest: recipient asks for units of one blood group.
Status flow: Pending -> Completed (stock decremented) | Rejected (stock untouched).
"""
from sqlalchemy import Column, Integer, String, ForeignKey, Date, DateTime, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from bloodbank.db.base import Base


class BloodRequest(Base):
    __tablename__ = "blood_requests"
    __table_args__ = (
        CheckConstraint("units_requested > 0", name="ck_request_units_positive"),
        CheckConstraint(
            "status IN ('Pending', 'Completed', 'Rejected')",
            name="ck_request_status",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    recipient_id = Column(Integer, ForeignKey("recipients.id"), nullable=False, index=True)
    blood_group = Column(String(5), nullable=False)
    units_requested = Column(Integer, nullable=False)
    request_date = Column(Date, nullable=False)
    status = Column(String(16), nullable=False, default="Pending", index=True)
    processed_at = Column(DateTime(timezone=True), nullable=True)

    recipient = relationship("Recipient", backref="requests")
