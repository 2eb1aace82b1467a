"""Data schemas for patient records and their source payloads"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


PatientId = Union[int, str]
LoadState = Literal["idle", "loading", "loaded", "failed"]


class PatientRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: PatientId
    name: str
    age: int = Field(ge=0, le=120)
    contact: str = ""
    email: str = ""
    address: str = ""
    notes: str = ""


# --- Remote source payload ---
class SourceAddress(BaseModel):
    model_config = ConfigDict(extra="ignore")

    suite: str
    street: str
    city: str


class SourceRecord(BaseModel):
    """A user-like record as returned by the collection endpoint."""
    model_config = ConfigDict(extra="ignore")

    id: PatientId
    name: str
    email: str
    phone: str
    address: SourceAddress


class LoadStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    state: LoadState = "idle"
    message: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.state == "failed"


class ValidationErrorKind(str, Enum):
    MISSING_NAME = "MissingName"
    INVALID_AGE = "InvalidAge"
    INVALID_CONTACT = "InvalidContact"
    INVALID_EMAIL = "InvalidEmail"

    @property
    def message(self) -> str:
        return VALIDATION_MESSAGES[self]


VALIDATION_MESSAGES: Dict[ValidationErrorKind, str] = {
    ValidationErrorKind.MISSING_NAME: "Please provide a patient name",
    ValidationErrorKind.INVALID_AGE: "Please provide a valid age (0-120)",
    ValidationErrorKind.INVALID_CONTACT: "Please provide a valid contact number",
    ValidationErrorKind.INVALID_EMAIL: "Please provide a valid email address",
}


class NewPatientForm(BaseModel):
    """Raw, unvalidated values from the creation form."""
    name: Optional[str] = ""
    age: Optional[Any] = ""
    contact: Optional[str] = ""
    email: Optional[str] = ""
    address: Optional[str] = ""
    notes: Optional[str] = ""


class SubmitResult(BaseModel):
    record: Optional[PatientRecord] = None
    error: Optional[ValidationErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.record is not None

    @property
    def message(self) -> Optional[str]:
        return self.error.message if self.error is not None else None
