"""Dashboard state container

Owns the patient store, the search query, the detail selection, the
load status and the creation form. Every mutation goes through a method
here and is serialised on one lock, so the loader thread and UI actions
never interleave their writes.
"""
from __future__ import annotations

import logging
import threading
import time
from typing import Any, Dict, List, Mapping, Optional, Union

from patient_dashboard.records.filtering import filter_patients
from patient_dashboard.records.loader import LOAD_FAILED_MESSAGE, LoadError, PatientSourceClient
from patient_dashboard.records.schemas import (
    LoadStatus,
    NewPatientForm,
    PatientId,
    PatientRecord,
    SubmitResult,
)
from patient_dashboard.records.validate import validate_new_patient

logger = logging.getLogger(__name__)

LOADING_MESSAGE = "Loading patients..."
EMPTY_MESSAGE = "No patients found matching your search."


class UnknownPatientError(KeyError):
    """Raised when selecting a patient id that is not in the store."""


class DashboardState:
    def __init__(self):
        self._lock = threading.RLock()
        self._records: List[PatientRecord] = []
        self._query = ""
        self._selected: Optional[PatientRecord] = None
        self._status = LoadStatus()
        self._form_open = False
        self._draft: Dict[str, Any] = {}
        self._last_id = 0

    # --- read side ---
    @property
    def store(self) -> List[PatientRecord]:
        with self._lock:
            return list(self._records)

    @property
    def query(self) -> str:
        return self._query

    @property
    def visible(self) -> List[PatientRecord]:
        with self._lock:
            return filter_patients(self._records, self._query)

    @property
    def selected(self) -> Optional[PatientRecord]:
        return self._selected

    @property
    def load_status(self) -> LoadStatus:
        return self._status

    @property
    def form_open(self) -> bool:
        return self._form_open

    @property
    def draft(self) -> Dict[str, Any]:
        with self._lock:
            return dict(self._draft)

    def get(self, patient_id: PatientId) -> PatientRecord:
        with self._lock:
            for p in self._records:
                if p.id == patient_id or str(p.id) == str(patient_id):
                    return p
        raise UnknownPatientError(patient_id)

    # --- loader ---
    def _claim_load(self) -> bool:
        """Move idle -> loading; False if a load was already triggered."""
        with self._lock:
            if self._status.state != "idle":
                logger.debug(f"Load already {self._status.state}; skipping")
                return False
            self._status = LoadStatus(state="loading")
            return True

    def _fail_load(self, message: str) -> None:
        with self._lock:
            self._records = []
            self._status = LoadStatus(state="failed", message=message)

    def _run_load(self, client: PatientSourceClient) -> LoadStatus:
        try:
            records = client.fetch_patients()
        except LoadError as e:
            self._fail_load(e.message)
            logger.warning(f"Patient load failed: {e.message}")
            return self._status
        except Exception:
            logger.exception("Unexpected error while loading patients")
            self._fail_load(LOAD_FAILED_MESSAGE)
            return self._status

        with self._lock:
            self._records = records
            self._status = LoadStatus(state="loaded")
        logger.info(f"Loaded {len(records)} patients")
        return self._status

    def load(self, client: PatientSourceClient) -> LoadStatus:
        """Fetch the store once. Later calls return the current status."""
        if not self._claim_load():
            return self._status
        return self._run_load(client)

    def start_background_load(self, client: PatientSourceClient) -> Optional[threading.Thread]:
        """Run the load on a worker thread; None if a load was already triggered."""
        if not self._claim_load():
            return None
        thread = threading.Thread(target=self._run_load, args=(client,), name="patient-loader", daemon=True)
        thread.start()
        return thread

    # --- search ---
    def set_query(self, query: str) -> None:
        with self._lock:
            self._query = query or ""

    # --- selection ---
    def select(self, patient: Union[PatientRecord, PatientId]) -> PatientRecord:
        record = patient if isinstance(patient, PatientRecord) else self.get(patient)
        with self._lock:
            self._selected = record
        logger.debug(f"Selected patient {record.id}")
        return record

    def dismiss(self) -> None:
        with self._lock:
            self._selected = None

    # --- creation form ---
    def toggle_form(self) -> bool:
        with self._lock:
            self._form_open = not self._form_open
            self._draft = {}
            return self._form_open

    def close_form(self) -> None:
        with self._lock:
            self._form_open = False
            self._draft = {}

    def _next_id(self) -> int:
        taken = {p.id for p in self._records}
        candidate = max(int(time.time() * 1000), self._last_id + 1)
        while candidate in taken or str(candidate) in taken:
            candidate += 1
        self._last_id = candidate
        return candidate

    def submit_new_patient(self, raw: Union[NewPatientForm, Mapping[str, Any]]) -> SubmitResult:
        """Validate the form and, if it passes, prepend the new patient.

        On success the query is cleared and the form closed. On failure
        nothing but the draft changes: the entered values are kept.
        """
        form = raw if isinstance(raw, NewPatientForm) else NewPatientForm.model_validate(dict(raw))
        fields, error = validate_new_patient(form)

        with self._lock:
            if error is not None:
                self._draft = form.model_dump()
                logger.info(f"Rejected new patient: {error.value}")
                return SubmitResult(error=error)

            record = PatientRecord(id=self._next_id(), **fields)
            self._records.insert(0, record)
            self._query = ""
            self._form_open = False
            self._draft = {}

        logger.info(f"Added patient {record.id} ({record.name})")
        return SubmitResult(record=record)

    # --- status line ---
    def status_message(self) -> Optional[str]:
        status = self._status
        if status.state == "loading":
            return LOADING_MESSAGE
        if status.failed:
            return f"Error: {status.message}"
        if not self.visible:
            return EMPTY_MESSAGE
        return None
