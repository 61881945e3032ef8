"""
RAHAT - Test Configuration and Fixtures
"""
import os

# Set testing environment before the app reads it
os.environ["JWT_SECRET"] = "test-jwt-secret-for-testing-only"
os.environ["GOOGLE_CLIENT_ID"] = "test-client-id.apps.googleusercontent.com"
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from rahat.db.db import build_engine, create_db_and_tables, get_engine
from rahat.main import app
from rahat.models.user import User
from rahat.utils.auth_helper import create_access_token
from rahat.utils.report_store import ReportStore


@pytest.fixture
def engine(tmp_path):
    """Fresh SQLite file database for each test"""
    db_engine = build_engine(f"sqlite:///{tmp_path / 'rahat-test.db'}")
    create_db_and_tables(db_engine)
    yield db_engine
    db_engine.dispose()


@pytest.fixture
def store(engine) -> ReportStore:
    return ReportStore(engine)


@pytest.fixture
def client(engine):
    app.dependency_overrides[get_engine] = lambda: engine
    yield TestClient(app)
    app.dependency_overrides.clear()


def _create_user(engine, public_id: str, name: str, role: str) -> User:
    user = User(public_id=public_id, name=name, email=f"{public_id}@example.com", role=role)
    with Session(engine) as session:
        session.add(user)
        session.commit()
        session.refresh(user)
    return user


@pytest.fixture
def ngo_user(engine) -> User:
    return _create_user(engine, "ngo-1", "Relief NGO", "ngo")


@pytest.fixture
def sar_user(engine) -> User:
    return _create_user(engine, "sar-1", "Rescue Team", "sar")


@pytest.fixture
def citizen_user(engine) -> User:
    return _create_user(engine, "citizen-1", "Citizen", "citizen")


def _headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture
def ngo_headers(ngo_user) -> dict:
    return _headers(ngo_user)


@pytest.fixture
def sar_headers(sar_user) -> dict:
    return _headers(sar_user)


@pytest.fixture
def citizen_headers(citizen_user) -> dict:
    return _headers(citizen_user)


@pytest.fixture
def supply_payload() -> dict:
    return {
        "type": "water",
        "quantity": 5,
        "urgency": "high",
        "description": "Drinking water for a shelter",
        "contact_info": "+91 98765 43210",
        "location": {"lat": 19.076, "lng": 72.8777},
    }


@pytest.fixture
def missing_payload() -> dict:
    return {
        "name": "Asha Patel",
        "age": 34,
        "gender": "female",
        "last_seen": "Near the railway station, Monday evening",
        "description": "Wearing a blue saree",
        "contact_info": "asha.family@example.com",
        "location": {"lat": 19.0, "lng": 72.8},
    }


@pytest.fixture
def damage_payload() -> dict:
    return {
        "type": "bridge",
        "severity": "high",
        "description": "Bridge deck partially collapsed",
        "location": {"lat": 19.1, "lng": 72.9},
    }


@pytest.fixture
def sos_payload() -> dict:
    return {
        "name": "Ravi",
        "contact_info": "+91 91234 56789",
        "description": "Trapped on the roof, water rising",
        "location": {"lat": 19.2, "lng": 72.95},
    }
