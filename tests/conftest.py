import os
import sys

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from cleaning_service_api.app.core.config import settings
from cleaning_service_api.app.core.db import init_db
from cleaning_service_api.app.main import app


@pytest.fixture(autouse=True)
def database(tmp_path, monkeypatch):
    """Point the app at a fresh SQLite file and use a cheap hash cost."""
    db_path = tmp_path / "cleaning_service.sqlite3"
    monkeypatch.setattr(settings, "database_url", str(db_path))
    monkeypatch.setattr(settings, "password_hash_iterations", 1000)
    init_db()
    return db_path


@pytest.fixture
def client(database):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def register(client):
    """Register a user and return the Authorization header for them."""

    def _register(username, password="correct-horse"):
        response = client.post("/api/register", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _register


@pytest.fixture
def booking_payload():
    return {
        "customer_name": "Jane Doe",
        "address": "12 High Street",
        "date_time": "2030-05-01T10:00:00",
        "service_id": 1,
    }
