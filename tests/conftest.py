"""
Pytest configuration and shared fixtures for testing.

Provides reusable test fixtures:
- test_client: FastAPI TestClient for API integration tests
- make_shift: factory for canonical Shift objects
- wards / departments / doctors: reference lists as the backend returns them
- shift_types: the packaged shift type definitions
"""

import datetime
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# ruff: noqa: E402
from dutyroster.core.models import Department, Doctor, Shift, Ward
from dutyroster.core.storage import get_shift_types
from dutyroster.main import app

# Monday
WEEK_MONDAY = datetime.date(2025, 11, 10)


@pytest.fixture(scope="function")
def test_client():
    """
    Create FastAPI TestClient.

    The client runs the application lifespan, so shift types are loaded
    exactly as on startup.

    Yields:
        TestClient: FastAPI test client for API testing
    """
    with TestClient(app) as client:
        yield client


@pytest.fixture
def make_shift():
    """
    Factory for Shift objects with sensible defaults.

    Defaults describe a Morning shift (06:00-14:00) in the ICU on Monday
    2025-11-10 for Dr. Rajesh Kumar.
    """
    counter = {"n": 0}

    def _make(**overrides) -> Shift:
        counter["n"] += 1
        data = {
            "id": f"S{counter['n']}",
            "doctor_id": "D001",
            "doctor_name": "Dr. Rajesh Kumar",
            "specialty": "Cardiologist",
            "ward": "ICU",
            "department": "Cardiology",
            "date": WEEK_MONDAY,
            "start_time": "06:00",
            "end_time": "14:00",
            "shift_type": "Morning",
            "status": "Scheduled",
        }
        data.update(overrides)
        return Shift(**data)

    return _make


@pytest.fixture
def wards() -> list[Ward]:
    return [
        Ward(id=1, name="ICU"),
        Ward(id=2, name="General Ward"),
        Ward(id=3, name="Maternity Ward"),
    ]


@pytest.fixture
def departments() -> list[Department]:
    return [
        Department(id=10, department_name="Cardiology"),
        Department(id=11, department_name="Pediatrics"),
        Department(id=12, department_name="Surgery"),
    ]


@pytest.fixture
def doctors() -> list[Doctor]:
    return [
        Doctor(id=1, name="Dr. Rajesh Kumar", specialty="Cardiologist", department="Cardiology", phone="+91-9876543210"),
        Doctor(id=2, name="Dr. Priya Sharma", specialty="Pediatrician", department="Pediatrics"),
        Doctor(id=3, name="Dr. Vikram Singh", specialty="Surgeon", department="Surgery"),
    ]


@pytest.fixture
def shift_types():
    """Shift type definitions keyed by kind, from the packaged data file."""
    return get_shift_types()
