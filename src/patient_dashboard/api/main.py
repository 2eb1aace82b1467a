"""FastAPI application exposing the dashboard actions as JSON endpoints."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import List, Optional

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from patient_dashboard.config import SETTINGS
from patient_dashboard.dashboard import DashboardState, UnknownPatientError
from patient_dashboard.logging_conf import setup_logging
from patient_dashboard.records.loader import PatientSourceClient
from patient_dashboard.records.schemas import LoadStatus, NewPatientForm, PatientRecord
from patient_dashboard.ui.formatting import detail_rows

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


# === Response Models ===
class HealthResponse(BaseModel):
    status: str
    version: str
    load_status: LoadStatus


class StatusResponse(BaseModel):
    load_status: LoadStatus
    message: Optional[str] = None


class PatientListResponse(BaseModel):
    query: str
    count: int
    total: int
    patients: List[PatientRecord]


class QueryRequest(BaseModel):
    query: str = ""


class FormResponse(BaseModel):
    open: bool
    draft: dict


class DetailRow(BaseModel):
    label: str
    value: str


class SelectionResponse(BaseModel):
    selected: Optional[PatientRecord] = None
    details: List[DetailRow] = []


def _selection_response(record: Optional[PatientRecord]) -> SelectionResponse:
    if record is None:
        return SelectionResponse()
    rows = [DetailRow(label=label, value=value) for label, value in detail_rows(record)]
    return SelectionResponse(selected=record, details=rows)


def get_dashboard(request: Request) -> DashboardState:
    return request.app.state.dashboard


def create_app(
    dashboard: Optional[DashboardState] = None,
    source: Optional[PatientSourceClient] = None,
    *,
    autoload: bool = True,
) -> FastAPI:
    dashboard = dashboard or DashboardState()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if autoload:
            dashboard.start_background_load(source or PatientSourceClient())
        yield

    app = FastAPI(
        title="Patient Records Dashboard API",
        description="Search, inspect and add patient records",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.dashboard = dashboard

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # === Endpoints ===

    @app.get("/", response_class=HTMLResponse)
    async def root():
        """API landing page."""
        return """
        <html>
            <head><title>Patient Records Dashboard API</title></head>
            <body style="font-family: sans-serif; max-width: 800px; margin: 50px auto;">
                <h1>🏥 Patient Records Dashboard API</h1>
                <h2>Endpoints:</h2>
                <ul>
                    <li><a href="/docs">/docs</a> - Interactive API documentation</li>
                    <li><a href="/health">/health</a> - Health check</li>
                    <li><a href="/patients">/patients</a> - Patients matching the current search</li>
                    <li><a href="/selection">/selection</a> - Patient shown in the detail view</li>
                </ul>
            </body>
        </html>
        """

    @app.get("/health", response_model=HealthResponse)
    async def health_check(state: DashboardState = Depends(get_dashboard)):
        """Health check endpoint."""
        return HealthResponse(status="healthy", version=VERSION, load_status=state.load_status)

    @app.get("/status", response_model=StatusResponse)
    async def get_status(state: DashboardState = Depends(get_dashboard)):
        """Load status and the status line the dashboard shows."""
        return StatusResponse(load_status=state.load_status, message=state.status_message())

    @app.get("/patients", response_model=PatientListResponse)
    async def list_patients(state: DashboardState = Depends(get_dashboard)):
        """
        Patients visible under the current search query.

        Returns:
            The visible set, in store order, plus store size.
        """
        visible = state.visible
        return PatientListResponse(
            query=state.query,
            count=len(visible),
            total=len(state.store),
            patients=visible,
        )

    @app.put("/query", response_model=PatientListResponse)
    async def set_query(body: QueryRequest, state: DashboardState = Depends(get_dashboard)):
        """Update the search query; returns the new visible set."""
        state.set_query(body.query)
        return await list_patients(state)

    @app.get("/form", response_model=FormResponse)
    async def get_form(state: DashboardState = Depends(get_dashboard)):
        return FormResponse(open=state.form_open, draft=state.draft)

    @app.post("/form/toggle", response_model=FormResponse)
    async def toggle_form(state: DashboardState = Depends(get_dashboard)):
        state.toggle_form()
        return FormResponse(open=state.form_open, draft=state.draft)

    @app.post("/patients", response_model=PatientRecord, status_code=status.HTTP_201_CREATED)
    async def add_patient(form: NewPatientForm, state: DashboardState = Depends(get_dashboard)):
        """
        Validate and add a new patient.

        Raises:
            422 with the validation error kind and message.
        """
        result = state.submit_new_patient(form)
        if not result.ok:
            raise HTTPException(
                status_code=422,
                detail={"error": result.error.value, "message": result.message},
            )
        return result.record

    @app.get("/selection", response_model=SelectionResponse)
    async def get_selection(state: DashboardState = Depends(get_dashboard)):
        return _selection_response(state.selected)

    @app.put("/selection/{patient_id}", response_model=SelectionResponse)
    async def select_patient(patient_id: str, state: DashboardState = Depends(get_dashboard)):
        """Show a patient in the detail view."""
        try:
            record = state.select(patient_id)
        except UnknownPatientError:
            raise HTTPException(status_code=404, detail=f"Patient not found: {patient_id}")
        return _selection_response(record)

    @app.delete("/selection", response_model=SelectionResponse)
    async def dismiss_selection(state: DashboardState = Depends(get_dashboard)):
        state.dismiss()
        return _selection_response(None)

    return app


app = create_app()


if __name__ == "__main__":
    setup_logging(SETTINGS.log_level)
    uvicorn.run(app, host=SETTINGS.api_host, port=SETTINGS.api_port)
