# tests/conftest.py

import pytest
from fastapi.testclient import TestClient

from roombook.core.config import Settings
from roombook.main import create_app


ALLOWED_ORIGIN = "http://allowed.test"


@pytest.fixture
def settings():
    return Settings(
        environment="test",
        database_url="sqlite://",
        jwt_secret="test-secret",
        bcrypt_rounds=4,
        cors_origins=[ALLOWED_ORIGIN],
    )


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def signup(client):
    def _signup(username="alice", password="secret"):
        return client.post("/users", json={"username": username, "password": password})
    return _signup


@pytest.fixture
def auth_headers(client, signup):
    signup("alice", "secret")
    res = client.post("/users/signin", json={"username": "alice", "password": "secret"})
    assert res.status_code == 200
    return {"Authorization": f"Bearer {res.json()['token']}"}


@pytest.fixture
def booking_payload():
    def _payload(**overrides):
        payload = {
            "date": "2024-01-01",
            "event": "Sprint review",
            "clockStart": {"hours": 9, "minutes": 0},
            "clockEnd": {"hours": 10, "minutes": 0},
            "room": "A",
            "pic": "Budi",
            "kapasitas": 8,
            "rapat": "Weekly sync",
            "catatan": "Bring laptops",
        }
        payload.update(overrides)
        return payload
    return _payload


@pytest.fixture
def create_booking(client, auth_headers, booking_payload):
    def _create(**overrides):
        return client.post("/bookings", json=booking_payload(**overrides), headers=auth_headers)
    return _create
