"""Shared pytest fixtures for the application tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient
from flask_jwt_extended import create_access_token

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app import create_app  # noqa: E402
from config import Config  # noqa: E402
from models import db  # noqa: E402
from models.user import User  # noqa: E402


class _BaseTestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SCHEDULER_ENABLED = False
    RATE_LIMIT = "1000 per minute"
    FRONTEND_URL = "https://library.example"
    CORS_ORIGINS = ["https://library.example"]
    MAIL_DEFAULT_SENDER = "library@example.com"
    JWT_SECRET_KEY = "test-secret-key-with-enough-length-for-hs256"


@pytest.fixture()
def app(tmp_path) -> Flask:
    """Create a Flask application instance for tests."""

    upload_dir = tmp_path / "uploads"

    class TestConfig(_BaseTestConfig):
        UPLOAD_DIR = str(upload_dir)

    application = create_app(TestConfig)

    with application.app_context():
        db.create_all()

    yield application

    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Return a test client for the Flask app."""

    return app.test_client()


def create_user(
    email: str,
    password: str = "Secret123",
    *,
    name: str = "Reader",
    role: str = "user",
    verified: bool = True,
) -> User:
    """Persist a user; must be called inside an app context."""

    user = User(name=name, email=email, role=role, account_verified=verified)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    return user


def auth_headers(app: Flask, user_id: int) -> dict[str, str]:
    with app.app_context():
        token = create_access_token(identity=str(user_id))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def admin_headers(app: Flask) -> dict[str, str]:
    with app.app_context():
        admin = create_user("admin@example.com", name="Admin", role="admin")
        admin_id = admin.id
    return auth_headers(app, admin_id)


@pytest.fixture()
def reader(app: Flask) -> int:
    with app.app_context():
        return create_user("reader@example.com").id


@pytest.fixture()
def reader_headers(app: Flask, reader: int) -> dict[str, str]:
    return auth_headers(app, reader)
