"""Donor/recipient registration constraints and stock seeding."""
from datetime import date, timedelta

import pytest

from bloodbank.core.config import settings
from bloodbank.core.exceptions import NotFoundError, ValidationError
from bloodbank.models.donor import Donor
from bloodbank.services import registry_service, stock_service


def _donor_fields(**overrides):
    fields = {
        "name": "Rahul Sharma",
        "age": 28,
        "gender": "Male",
        "blood_group": "O+",
        "contact": "9876543210",
        "address": "Delhi",
        "last_donation_date": date(2025, 7, 20),
    }
    fields.update(overrides)
    return fields


def test_register_donor_normalizes_fields(db):
    donor = registry_service.register_donor(
        db, **_donor_fields(name="  Rahul   Sharma ", gender="male", blood_group="o+")
    )

    assert donor.id is not None
    assert donor.name == "Rahul Sharma"
    assert donor.gender == "Male"
    assert donor.blood_group == "O+"
    assert registry_service.get_donor(db, donor.id).contact == "9876543210"


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"age": 17}, "age"),
        ({"age": -1}, "age"),
        ({"gender": "Unknown"}, "gender"),
        ({"blood_group": "C+"}, "blood_group"),
        ({"contact": "call me"}, "contact"),
        ({"contact": "9-----"}, "contact"),
        ({"contact": "12345"}, "contact"),
        ({"contact": "1234567890123456"}, "contact"),
        ({"name": "   "}, "name"),
        ({"last_donation_date": date.today() + timedelta(days=1)}, "last_donation_date"),
    ],
)
def test_register_donor_rejects_invalid_fields(db, overrides, field):
    with pytest.raises(ValidationError) as exc:
        registry_service.register_donor(db, **_donor_fields(**overrides))

    assert exc.value.field == field
    assert db.query(Donor).count() == 0


def test_donor_contact_must_be_unique(db):
    registry_service.register_donor(db, **_donor_fields())

    with pytest.raises(ValidationError) as exc:
        registry_service.register_donor(db, **_donor_fields(name="Someone Else"))

    assert exc.value.field == "contact"
    assert db.query(Donor).count() == 1


def test_donor_minimum_age_is_inclusive(db):
    donor = registry_service.register_donor(db, **_donor_fields(age=18))
    assert donor.age == 18


def test_register_recipient(db):
    recipient = registry_service.register_recipient(
        db, name="Neha Gupta", age=29, gender="Female",
        blood_group_required="B+", contact="9876512345", address="Kolkata",
    )

    assert registry_service.get_recipient(db, recipient.id).blood_group_required == "B+"


def test_recipient_age_must_be_positive(db):
    with pytest.raises(ValidationError) as exc:
        registry_service.register_recipient(
            db, name="Baby", age=0, gender="Other",
            blood_group_required="O-", contact="9876500000",
        )
    assert exc.value.field == "age"


def test_recipient_blood_group_error_names_its_field(db):
    with pytest.raises(ValidationError) as exc:
        registry_service.register_recipient(
            db, name="Amit Verma", age=40, gender="Male",
            blood_group_required="X", contact="9876554321",
        )
    assert exc.value.field == "blood_group_required"


def test_unknown_ids(db):
    with pytest.raises(NotFoundError):
        registry_service.get_donor(db, 1)
    with pytest.raises(NotFoundError):
        registry_service.get_recipient(db, 1)
    with pytest.raises(NotFoundError):
        registry_service.get_request(db, 1)


def test_set_stock_creates_then_overwrites(db):
    stock_service.set_stock(db, "A-", 3)
    stock_service.set_stock(db, "O+", 5)
    stock_service.set_stock(db, "A-", 1)

    assert stock_service.available_stock(db) == [("A-", 1), ("O+", 5)]


def test_set_stock_rejects_negative_units(db):
    with pytest.raises(ValidationError) as exc:
        stock_service.set_stock(db, "O+", -1)

    assert exc.value.field == "units_available"
    assert stock_service.available_stock(db) == []


def test_available_stock_is_ordered_by_blood_group(db):
    for group, units in [("O+", 5), ("A-", 3), ("B+", 4), ("AB+", 0)]:
        stock_service.set_stock(db, group, units)

    groups = [level.blood_group for level in stock_service.available_stock(db)]
    assert groups == sorted(groups)


def test_contact_with_separators_is_accepted(db):
    donor = registry_service.register_donor(db, **_donor_fields(contact="+91 98765-43210"))

    assert donor.contact == "+91 98765-43210"


def test_set_stock_rejects_units_above_maximum(db):
    with pytest.raises(ValidationError) as exc:
        stock_service.set_stock(db, "O+", settings.MAX_UNITS + 1)

    assert exc.value.field == "units_available"
    assert stock_service.available_stock(db) == []
