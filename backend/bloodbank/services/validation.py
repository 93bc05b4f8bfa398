"""Field checks shared by the services. Every failure names the field it rejects."""
import re
from datetime import date, datetime

from bloodbank.core.config import settings
from bloodbank.core.exceptions import ValidationError
from bloodbank.models.enums import BloodGroup, Gender

# Digits with optional leading + and space/dash separators; digit count is checked separately
_CONTACT_RE = re.compile(r"^\+?[0-9][0-9 \-]*$")
_CONTACT_DIGITS = (6, 15)


def normalize_blood_group(value: str, field: str = "blood_group") -> str:
    """Trim and upper-case, then require one of the eight ABO/Rh groups."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(field, "Blood group is required")
    candidate = value.strip().upper().replace(" ", "")
    try:
        return BloodGroup(candidate).value
    except ValueError:
        allowed = ", ".join(g.value for g in BloodGroup)
        raise ValidationError(field, f"Unknown blood group {value!r} (expected one of {allowed})")


def _require_units(value: int, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(field, "Must be a whole number")
    if value > settings.MAX_UNITS:
        raise ValidationError(field, f"Must be at most {settings.MAX_UNITS}")
    return value


def require_positive(value: int, field: str) -> int:
    _require_units(value, field)
    if value <= 0:
        raise ValidationError(field, "Must be greater than 0")
    return value


def require_non_negative(value: int, field: str) -> int:
    _require_units(value, field)
    if value < 0:
        raise ValidationError(field, "Cannot be negative")
    return value


def clean_name(name: str, field: str = "name") -> str:
    """Collapse whitespace and cap at the column width."""
    if not isinstance(name, str):
        raise ValidationError(field, "Name is required")
    name = " ".join(name.split())
    if not name:
        raise ValidationError(field, "Name cannot be empty")
    if len(name) > 100:
        raise ValidationError(field, "Name must be at most 100 characters")
    return name


def clean_gender(gender: str) -> str:
    if isinstance(gender, str):
        for option in Gender:
            if gender.strip().lower() == option.value.lower():
                return option.value
    raise ValidationError("gender", "Gender must be Male, Female or Other")


def clean_contact(contact: str) -> str:
    if isinstance(contact, str):
        contact = contact.strip()
        digits = sum(ch.isdigit() for ch in contact)
        low, high = _CONTACT_DIGITS
        # Column holds 15 characters, separators included
        if _CONTACT_RE.match(contact) and low <= digits <= high and len(contact) <= 15:
            return contact
    raise ValidationError("contact", "Contact must be a phone number of 6-15 digits")


def clean_address(address: str | None) -> str | None:
    if address is None:
        return None
    address = " ".join(address.split())
    if len(address) > 255:
        raise ValidationError("address", "Address must be at most 255 characters")
    return address or None


def require_not_future(value: date, field: str) -> date:
    if isinstance(value, datetime):
        value = value.date()
    if not isinstance(value, date):
        raise ValidationError(field, "Must be a date")
    if value > date.today():
        raise ValidationError(field, "Date cannot be in the future")
    return value
