"""Shared pytest fixtures for the application tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app import create_app  # noqa: E402
from config import Config  # noqa: E402
from models import DocumentStore  # noqa: E402


class _BaseTestConfig(Config):
    TESTING = True
    JWT_SECRET_KEY = "test-secret"
    # Lowest cost bcrypt accepts, keeps the suite fast.
    BCRYPT_LOG_ROUNDS = 4
    RESTRICT_ROLES = False
    CORS_ORIGINS = "*"


def build_app(tmp_path: Path, **overrides) -> Flask:
    """Create an app bound to a temporary document and upload directory."""

    class TestConfig(_BaseTestConfig):
        DATABASE_PATH = str(tmp_path / "db.json")
        UPLOAD_DIR = str(tmp_path / "uploads")

    for key, value in overrides.items():
        setattr(TestConfig, key, value)

    return create_app(TestConfig)


@pytest.fixture()
def app(tmp_path) -> Flask:
    """Create a Flask application instance for tests."""

    return build_app(tmp_path)


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Return a test client for the Flask app."""

    return app.test_client()


@pytest.fixture()
def store(app: Flask) -> DocumentStore:
    """Return the document store bound to the test app."""

    return app.extensions["document_store"]


def register(client: FlaskClient, email: str, password: str = "pw", **extra) -> dict:
    """Register a user through the API and return the response payload."""

    response = client.post(
        "/api/auth/register", json={"email": email, "password": password, **extra}
    )
    assert response.status_code == 200, response.get_json()
    return response.get_json()


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
