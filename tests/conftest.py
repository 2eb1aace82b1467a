"""Shared fixtures: a fake patient source served over httpx.MockTransport"""
from __future__ import annotations

import httpx
import pytest

from patient_dashboard.records.loader import PatientSourceClient

SOURCE_URL = "https://patients.test/users"


def make_user(uid: int, name: str, **overrides) -> dict:
    user = {
        "id": uid,
        "name": name,
        "username": name.split(" ")[0],
        "email": f"{name.split(' ')[0].lower()}@example.org",
        "phone": f"1-770-736-80{uid:02d}",
        "website": "example.org",
        "address": {
            "street": f"{uid} Main Street",
            "suite": f"Apt. {100 + uid}",
            "city": "Gwenborough",
            "zipcode": "92998-3874",
            "geo": {"lat": "-37.3159", "lng": "81.1496"},
        },
        "company": {"name": "Romaguera-Crona"},
    }
    user.update(overrides)
    return user


@pytest.fixture
def users() -> list[dict]:
    return [
        make_user(1, "Leanne Graham"),
        make_user(2, "Ervin Howell"),
        make_user(3, "Clementine Bauch"),
        make_user(4, "Patricia Lebsack"),
        make_user(5, "Chelsey Dietrich"),
    ]


def source_client(handler) -> PatientSourceClient:
    return PatientSourceClient(SOURCE_URL, timeout=5, transport=httpx.MockTransport(handler))


@pytest.fixture
def ok_client(users) -> PatientSourceClient:
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json=users)

    client = source_client(handler)
    client.calls = calls
    return client


@pytest.fixture
def failing_client() -> PatientSourceClient:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    return source_client(handler)


@pytest.fixture
def make_client():
    """Build a source client around an arbitrary request handler."""
    return source_client
