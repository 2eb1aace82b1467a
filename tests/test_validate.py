"""Tests for creation form validation"""
import pytest

from patient_dashboard.records.schemas import NewPatientForm, ValidationErrorKind
from patient_dashboard.records.validate import parse_age, validate_new_patient


def _form(**overrides):
    fields = {
        "name": "Jane Doe",
        "age": "34",
        "contact": "+1 (555) 123-4567",
        "email": "jane@example.com",
        "address": "12 Elm Street",
        "notes": "Allergic to penicillin",
    }
    fields.update(overrides)
    return fields


def test_valid_form_is_trimmed():
    fields, error = validate_new_patient(_form(name="  Jane Doe ", notes=" follow up \n"))
    assert error is None
    assert fields["name"] == "Jane Doe"
    assert fields["age"] == 34
    assert fields["notes"] == "follow up"


@pytest.mark.parametrize("name", ["", "   ", None])
def test_missing_name(name):
    _, error = validate_new_patient(_form(name=name))
    assert error is ValidationErrorKind.MISSING_NAME


@pytest.mark.parametrize("age", ["150", "-1", "121", 200])
def test_age_out_of_range(age):
    _, error = validate_new_patient(_form(age=age))
    assert error is ValidationErrorKind.INVALID_AGE


@pytest.mark.parametrize("age", ["0", "120", "", None, "abc"])
def test_age_boundaries_and_blank_are_valid(age):
    _, error = validate_new_patient(_form(age=age))
    assert error is None


@pytest.mark.parametrize(
    "raw,expected",
    [("34", 34), (" 42", 42), ("34abc", 34), ("3.7", 3), ("-5", -5), ("", 0), ("x1", 0), (None, 0), (12, 12), (7.9, 7)],
)
def test_parse_age_reads_leading_integer(raw, expected):
    assert parse_age(raw) == expected


@pytest.mark.parametrize("contact", ["555-1234", "+44 (20) 7946 0958", "  0123  "])
def test_contact_accepts_phone_characters(contact):
    _, error = validate_new_patient(_form(contact=contact))
    assert error is None


@pytest.mark.parametrize("contact", ["555-CALL", "1.555.123", "ext#12"])
def test_contact_rejects_other_characters(contact):
    _, error = validate_new_patient(_form(contact=contact))
    assert error is ValidationErrorKind.INVALID_CONTACT


@pytest.mark.parametrize("email", ["jane@example", "jane example@x.com", "@example.com", "jane@@example.com", "jane@example."])
def test_email_shape_is_enforced(email):
    _, error = validate_new_patient(_form(email=email))
    assert error is ValidationErrorKind.INVALID_EMAIL


def test_optional_fields_may_be_blank():
    _, error = validate_new_patient(_form(contact="  ", email="", address="", notes=""))
    assert error is None


def test_first_failure_wins():
    _, error = validate_new_patient(_form(name="", age="500", contact="abc", email="bad"))
    assert error is ValidationErrorKind.MISSING_NAME
    _, error = validate_new_patient(_form(age="500", contact="abc", email="bad"))
    assert error is ValidationErrorKind.INVALID_AGE
    _, error = validate_new_patient(_form(contact="abc", email="bad"))
    assert error is ValidationErrorKind.INVALID_CONTACT


def test_accepts_form_model():
    _, error = validate_new_patient(NewPatientForm(name="Jane", age=""))
    assert error is None


def test_error_messages():
    assert ValidationErrorKind.MISSING_NAME.message == "Please provide a patient name"
    assert ValidationErrorKind.INVALID_AGE.message == "Please provide a valid age (0-120)"


@pytest.mark.parametrize("age", ["1" * 5000, "9" * 5000, "00000150", "-" + "9" * 5000])
def test_oversized_age_is_invalid_not_an_error(age):
    _, error = validate_new_patient(_form(age=age))
    assert error is ValidationErrorKind.INVALID_AGE


def test_leading_zeros_are_ignored():
    assert parse_age("0" * 5000 + "42") == 42
    _, error = validate_new_patient(_form(age="000034"))
    assert error is None


@pytest.mark.parametrize("age", ["١٥٠", "１５０", "৫"])
def test_non_ascii_digits_count_as_blank(age):
    assert parse_age(age) == 0
    _, error = validate_new_patient(_form(age=age))
    assert error is None
