from bloodbank.models.donor import Donor
from bloodbank.models.recipient import Recipient
from bloodbank.models.blood_stock import BloodStock
from bloodbank.models.donation import Donation
from bloodbank.models.blood_request import BloodRequest
from bloodbank.models.enums import BloodGroup, Gender, RequestStatus

__all__ = [
    "Donor", "Recipient", "BloodStock", "Donation", "BloodRequest",
    "BloodGroup", "Gender", "RequestStatus",
]
