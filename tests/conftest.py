"""
Shared fixtures. The whole suite runs against the in-memory gateway.
"""

import os

# Must be set before clinicdesk.app is imported (it builds an app at import time)
os.environ["MONGO_BACKEND"] = "memory"
os.environ["APP_ENV"] = "testing"
os.environ["LOG_FORMAT"] = "text"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["SECURITY_PASSWORD_HASH_ITERATIONS"] = "1000"
os.environ["BOOTSTRAP_ADMIN_USER_ID"] = "admin"
os.environ["BOOTSTRAP_ADMIN_PASSWORD"] = "admin-pass"

import pytest
from fastapi.testclient import TestClient

from clinicdesk.core.config import reset_settings

ADMIN = ("admin", "admin-pass")
RECEPTIONIST = ("front-desk", "desk-pass")
DOCTOR = ("dr-rao", "doc-pass")


@pytest.fixture(autouse=True)
def fresh_settings():
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def client():
    from clinicdesk.app import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


def login(client, user_id, password):
    response = client.post("/auth/login", json={"user_id": user_id, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['data']['token']}"}


@pytest.fixture
def admin_headers(client):
    return login(client, *ADMIN)


@pytest.fixture
def receptionist_headers(client, admin_headers):
    user_id, password = RECEPTIONIST
    response = client.post(
        "/users",
        json={"user_id": user_id, "password": password, "role": "receptionist", "department": "Front Desk"},
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    return login(client, user_id, password)


@pytest.fixture
def doctor_headers(client, admin_headers):
    user_id, password = DOCTOR
    response = client.post(
        "/users",
        json={"user_id": user_id, "password": password, "role": "doctor", "department": "Orthopaedics"},
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    return login(client, user_id, password)
