"""
Pytest configuration and shared fixtures.

The app reads its settings at import time, so DATABASE_URL is pointed at a
throwaway SQLite file before anything from campusnav is imported.

Fixtures available to all tests:
  • client          — FastAPI TestClient (also an httpx.Client)
  • register_user   — register through the API, returns (user, token)
  • auth_headers    — Authorization header for a fresh registered user
  • seed_buildings  — insert buildings, returns them as listed by the API
"""

import os
import sys
import tempfile

import pytest

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

TEST_DB_PATH = os.path.join(tempfile.gettempdir(), f"campusnav_test_{os.getpid()}.db")
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("INSTITUTION_EMAIL_SUFFIX", "@go.minnstate.edu")

from fastapi.testclient import TestClient  # noqa: E402

from campusnav.db.database import drop_schema, init_schema, engine  # noqa: E402
from campusnav.main import app  # noqa: E402
from campusnav.services.building_service import get_building_catalog  # noqa: E402

PASSWORD = "correct horse battery"


@pytest.fixture(autouse=True)
def fresh_db():
    init_schema()
    yield
    drop_schema()


@pytest.fixture(scope="session", autouse=True)
def _cleanup_db_file():
    yield
    engine.dispose()
    if os.path.exists(TEST_DB_PATH):
        os.remove(TEST_DB_PATH)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def register_user(client):
    def _register(email: str = "student@go.minnstate.edu", password: str = PASSWORD):
        response = client.post(
            "/api/register",
            json={"email": email, "password": password, "confirmPassword": password},
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return body["user"], body["token"]
    return _register


@pytest.fixture
def auth_headers(register_user):
    _, token = register_user()
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def seed_buildings():
    def _seed(buildings=None):
        buildings = buildings if buildings is not None else [
            {"code": "SH", "name": "Stewart Hall", "latitude": 45.5535, "longitude": -94.1513},
            {"code": "ECC", "name": "Engineering and Computing Center", "latitude": 45.5516, "longitude": -94.1506},
            {"code": "AS", "name": "Atwood Memorial Center", "latitude": 45.5547, "longitude": -94.1527},
        ]
        catalog = get_building_catalog()
        catalog.upsert_buildings(buildings)
        return catalog.list_buildings()
    return _seed
