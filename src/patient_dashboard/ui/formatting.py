"""Display helpers shared by the dashboard views"""
from __future__ import annotations

from typing import List, Tuple

from patient_dashboard.records.schemas import PatientRecord

NOT_PROVIDED = "Not provided"
NO_NOTES = "No additional notes"


def initials(name: str) -> str:
    """Avatar letters: first letter of the first two words."""
    return "".join(part[0] for part in name.split(" ") if part)[:2]


def card_subtitle(record: PatientRecord) -> str:
    return f"{record.age} years • {record.contact}"


def detail_rows(record: PatientRecord) -> List[Tuple[str, str]]:
    # contact has no placeholder and may render empty
    return [
        ("Age", f"{record.age} years"),
        ("Contact", record.contact),
        ("Email", record.email or NOT_PROVIDED),
        ("Address", record.address or NOT_PROVIDED),
        ("Notes", record.notes or NO_NOTES),
    ]
