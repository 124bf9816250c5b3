"""Profile Validators — field ranges, completeness gates and the fractional-seat flag."""

from datetime import datetime

import pytest

from campuspool.core import validate_profile
from campuspool.core.validate_carpool_request import is_valid_passenger_count
from campuspool.core.validate_profile import (
    has_required_car_details,
    is_complete_profile_with_car,
    is_complete_profile_without_car,
    is_valid_bio,
    is_valid_car_capacity,
    is_valid_college_name,
    is_valid_graduation_year,
    is_valid_license_plate,
    is_valid_major,
)

THIS_YEAR = datetime.now().year


def _student(**overrides):
    profile = {"college": "State University", "major": "CS", "graduation_year": THIS_YEAR + 2}
    profile.update(overrides)
    return profile


# --- Text fields --------------------------------------------------------------

def test_college_name_bounds():
    assert is_valid_college_name("MIT")
    assert is_valid_college_name("A" * 100)
    assert not is_valid_college_name("M")
    assert not is_valid_college_name("A" * 101)
    assert not is_valid_college_name("  M  ")


def test_major_bounds():
    assert is_valid_major("CS")
    assert not is_valid_major("A" * 51)
    assert not is_valid_major(None)


def test_bio_allows_empty_and_caps_length():
    assert is_valid_bio("")
    assert is_valid_bio("x" * 500)
    assert not is_valid_bio("x" * 501)
    assert not is_valid_bio(None)


# --- Graduation year ----------------------------------------------------------

@pytest.mark.parametrize("value,expected", [
    (THIS_YEAR, True),
    (THIS_YEAR + 10, True),
    (THIS_YEAR + 11, False),
    (THIS_YEAR - 1, False),
    (float(THIS_YEAR + 1), True),
    (THIS_YEAR + 0.5, False),
    (str(THIS_YEAR), False),
    (True, False),
])
def test_graduation_year_window(value, expected):
    assert is_valid_graduation_year(value) is expected


# --- Car capacity & fractional seats ------------------------------------------

@pytest.mark.parametrize("value,expected", [
    (1, True), (8, True), (4.5, True), (0, False), (9, False),
    (True, False), ("4", False), (float("nan"), False),
])
def test_car_capacity_range(value, expected):
    assert is_valid_car_capacity(value) is expected


def test_fractional_seats_rejected_when_flag_off(monkeypatch):
    monkeypatch.setattr(validate_profile, "ALLOW_FRACTIONAL_SEATS", False)
    assert not is_valid_car_capacity(4.5)
    assert is_valid_car_capacity(4)
    assert not is_valid_passenger_count(2.5)
    assert is_valid_passenger_count(2.0)


# --- License plate ------------------------------------------------------------

@pytest.mark.parametrize("value,expected", [
    ("ABC-123", True),
    ("AB 12", True),
    ("A", False),
    ("ABCDEFGHIJK", False),
    ("AB_12", False),
    ("ÄB12", False),
    (None, False),
])
def test_license_plate_rules(value, expected):
    assert is_valid_license_plate(value) is expected


# --- Completeness -------------------------------------------------------------

def test_complete_without_car():
    assert is_complete_profile_without_car(_student())
    assert not is_complete_profile_without_car(_student(major=None))
    assert not is_complete_profile_without_car("not a profile")


def test_complete_with_car_needs_car_fields():
    driver = _student(car_model="Civic", car_capacity=4, license_plate="ABC123")
    assert is_complete_profile_with_car(driver)
    assert not is_complete_profile_with_car(_student(car_model="Civic", car_capacity=4))
    assert not is_complete_profile_with_car(
        {"car_model": "Civic", "car_capacity": 4, "license_plate": "ABC123"},
    )


def test_car_details_only_required_for_drivers():
    assert has_required_car_details({"has_car": False})
    assert has_required_car_details({})
    assert not has_required_car_details({"has_car": True})
    assert not has_required_car_details({"has_car": True, "car_model": "Civic", "car_capacity": 4})
    assert has_required_car_details(
        {"has_car": True, "car_model": "Civic", "car_color": "Blue", "car_capacity": 4},
    )
    assert not has_required_car_details(None)
