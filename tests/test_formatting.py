"""Tests for display helpers"""
from patient_dashboard.records.schemas import PatientRecord
from patient_dashboard.ui.formatting import card_subtitle, detail_rows, initials


def test_initials_use_first_two_words():
    assert initials("Leanne Graham") == "LG"
    assert initials("Mrs. Dennis Schulist") == "MD"
    assert initials("Cher") == "C"
    assert initials("  Jane   Doe ") == "JD"


def test_card_subtitle():
    p = PatientRecord(id=1, name="Jane Doe", age=34, contact="555-1234")
    assert card_subtitle(p) == "34 years • 555-1234"


def test_detail_rows_show_placeholders_for_blank_fields():
    p = PatientRecord(id=1, name="Jane Doe", age=0)
    rows = dict(detail_rows(p))
    assert rows == {
        "Age": "0 years",
        "Contact": "",
        "Email": "Not provided",
        "Address": "Not provided",
        "Notes": "No additional notes",
    }


def test_detail_rows_show_values():
    p = PatientRecord(
        id=1,
        name="Jane Doe",
        age=34,
        contact="555-1234",
        email="jane@example.com",
        address="12 Elm Street",
        notes="Allergic to penicillin",
    )
    assert detail_rows(p) == [
        ("Age", "34 years"),
        ("Contact", "555-1234"),
        ("Email", "jane@example.com"),
        ("Address", "12 Elm Street"),
        ("Notes", "Allergic to penicillin"),
    ]
