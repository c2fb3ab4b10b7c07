"""
Identifier generation tests.
"""

import re
from datetime import datetime

import pytest

from clinicdesk.domain.value_objects import (
    BillNumber,
    DoctorId,
    PatientId,
    generate_bill_number,
    generate_doctor_id,
    generate_patient_id,
)
from clinicdesk.domain.value_objects.doctor_id import name_initials

NOW = datetime(2025, 3, 1, 10, 30)


def test_patient_id_pads_short_name():
    assert generate_patient_id("Al", "9876543210", NOW) == "25-3210-ALXX"


def test_patient_id_takes_first_four_letters_uppercased():
    assert generate_patient_id("alexander", "9876543210", NOW) == "25-3210-ALEX"


def test_patient_id_empty_name():
    assert generate_patient_id("", "9876543210", NOW) == "25-3210-XXXX"


def test_patient_id_matches_format():
    value = generate_patient_id("Priya Sharma", "9123456789", NOW)
    assert re.match(r"^\d{2}-\d{4}-[A-Z ]{4}$", value)
    assert PatientId(value).value == value


def test_patient_id_rejects_malformed_value():
    with pytest.raises(ValueError):
        PatientId("not-an-id")


def test_patient_id_collapses_whitespace_in_name():
    value = generate_patient_id("Al\nice Smith", "9876543210", NOW)
    assert value == "25-3210-AL I"
    assert PatientId(value).value == value
    assert generate_patient_id("A\t\t b", "9876543210", NOW) == "25-3210-A BX"


def test_doctor_id_example():
    assert generate_doctor_id("John Doe", "REG123456", NOW) == "DOC-253456-JD"


def test_doctor_id_value_object_generate():
    assert DoctorId.generate("Anita Kumari Das", "MCI-0042", NOW).value == "DOC-250042-AKD"


def test_doctor_id_collapses_whitespace_in_registration():
    assert DoctorId.generate("John\nDoe", "REG\n12", NOW).value == "DOC-25G 12-JD"


@pytest.mark.parametrize(
    "name,expected",
    [
        ("John Doe", "JD"),
        ("madonna", "MX"),
        ("  ravi   shankar  ", "RS"),
        ("", "XX"),
    ],
)
def test_name_initials(name, expected):
    assert name_initials(name) == expected


def test_bill_number_format():
    value = generate_bill_number(NOW)
    assert re.match(r"^BILL-\d+$", value)
    assert BillNumber(value).value == value


def test_bill_numbers_strictly_increase_within_same_millisecond():
    first = generate_bill_number(NOW)
    second = generate_bill_number(NOW)
    assert int(second.split("-")[1]) > int(first.split("-")[1])


def test_bill_number_rejects_malformed_value():
    with pytest.raises(ValueError):
        BillNumber("BILL-abc")
