from enum import Enum


class BloodGroup(str, Enum):
    A_POSITIVE = "A+"
    A_NEGATIVE = "A-"
    B_POSITIVE = "B+"
    B_NEGATIVE = "B-"
    AB_POSITIVE = "AB+"
    AB_NEGATIVE = "AB-"
    O_POSITIVE = "O+"
    O_NEGATIVE = "O-"


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class RequestStatus(str, Enum):
    """Pending -> Completed | Rejected. Both outcomes are final."""
    PENDING = "Pending"
    COMPLETED = "Completed"
    REJECTED = "Rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not RequestStatus.PENDING
