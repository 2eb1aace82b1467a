"""Creation form validation"""
from __future__ import annotations

import re
from typing import Any, Mapping, Optional, Tuple

from .schemas import NewPatientForm, ValidationErrorKind


_LEADING_INT_RE = re.compile(r"\s*([+-]?)0*([0-9]+)")
_CONTACT_RE = re.compile(r"[0-9\s\-+()]+")
_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

MIN_AGE = 0
MAX_AGE = 120
# digit runs longer than this are out of range whatever they say
_MAX_AGE_DIGITS = 4


def parse_age(raw: Any) -> int:
    """Leading-integer parse; anything unparseable counts as 0."""
    if raw is None or isinstance(raw, bool):
        return 0
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if raw == raw and abs(raw) != float("inf") else 0
    match = _LEADING_INT_RE.match(str(raw))
    if not match:
        return 0
    sign, digits = match.groups()
    if len(digits) > _MAX_AGE_DIGITS:
        value = 10 ** _MAX_AGE_DIGITS
    else:
        value = int(digits, 10)
    return -value if sign == "-" else value


def clean_form(raw: NewPatientForm | Mapping[str, Any]) -> dict:
    """Trimmed field values plus the parsed age."""
    if not isinstance(raw, NewPatientForm):
        raw = NewPatientForm.model_validate(dict(raw))

    def text(v: Optional[str]) -> str:
        return (v or "").strip()

    return {
        "name": text(raw.name),
        "age": parse_age(raw.age),
        "contact": text(raw.contact),
        "email": text(raw.email),
        "address": text(raw.address),
        "notes": text(raw.notes),
    }


def validate_new_patient(
    raw: NewPatientForm | Mapping[str, Any],
) -> Tuple[dict, Optional[ValidationErrorKind]]:
    """Check fields in order; the first failing rule is reported."""
    fields = clean_form(raw)

    if not fields["name"]:
        return fields, ValidationErrorKind.MISSING_NAME
    if not MIN_AGE <= fields["age"] <= MAX_AGE:
        return fields, ValidationErrorKind.INVALID_AGE
    if fields["contact"] and not _CONTACT_RE.fullmatch(fields["contact"]):
        return fields, ValidationErrorKind.INVALID_CONTACT
    if fields["email"] and not _EMAIL_RE.fullmatch(fields["email"]):
        return fields, ValidationErrorKind.INVALID_EMAIL
    return fields, None
