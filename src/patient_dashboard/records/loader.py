"""Remote patient source client and record mapping"""
from __future__ import annotations

import logging
from typing import Any, List, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from patient_dashboard.config import SETTINGS
from patient_dashboard.records.schemas import PatientRecord, SourceRecord

logger = logging.getLogger(__name__)

LOAD_FAILED_MESSAGE = "Failed to fetch patients data"
NOTES_TEMPLATE = "Patient record for {name}. Regular check-ups recommended."

_SOURCE_LIST = TypeAdapter(List[SourceRecord])


class LoadError(Exception):
    """Raised when the patient source cannot be fetched or understood."""

    def __init__(self, message: str = LOAD_FAILED_MESSAGE):
        super().__init__(message)
        self.message = message


def synthetic_age(index: int) -> int:
    """Placeholder age for a source record; the source carries none."""
    return 20 + (index * 3) % 60


def to_patient_record(source: SourceRecord, index: int) -> PatientRecord:
    addr = source.address
    return PatientRecord(
        id=source.id,
        name=source.name,
        age=synthetic_age(index),
        contact=source.phone,
        email=source.email,
        address=f"{addr.suite}, {addr.street}, {addr.city}",
        notes=NOTES_TEMPLATE.format(name=source.name),
    )


def to_patient_records(sources: List[SourceRecord]) -> List[PatientRecord]:
    return [to_patient_record(s, i) for i, s in enumerate(sources)]


class PatientSourceClient:
    def __init__(
        self,
        url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.url = url or SETTINGS.source_url
        self.timeout = timeout if timeout is not None else SETTINGS.request_timeout
        self._transport = transport

    def fetch_source_records(self) -> List[SourceRecord]:
        """GET the collection endpoint and parse it into source records.

        Invalid URLs, transport errors, non-2xx responses, invalid JSON and
        payloads that don't match the expected shape all raise LoadError.
        """
        logger.info(f"Fetching patients from {self.url}")
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                r = client.get(self.url)
                r.raise_for_status()
                data: Any = r.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Patient source returned HTTP {e.response.status_code}")
            raise LoadError() from e
        except httpx.HTTPError as e:
            logger.error(f"Patient source request failed: {e}")
            raise LoadError() from e
        except httpx.InvalidURL as e:
            logger.error(f"Patient source URL is invalid: {e}")
            raise LoadError() from e
        except ValueError as e:
            logger.error(f"Patient source returned invalid JSON: {e}")
            raise LoadError() from e

        try:
            records = _SOURCE_LIST.validate_python(data)
        except ValidationError as e:
            logger.error(f"Patient source payload has unexpected shape: {e.error_count()} error(s)")
            raise LoadError() from e

        logger.info(f"Received {len(records)} source records")
        return records

    def fetch_patients(self) -> List[PatientRecord]:
        return to_patient_records(self.fetch_source_records())
