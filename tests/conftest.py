from collections.abc import Callable
from datetime import timedelta

import mongomock
import pytest
from flask import Flask
from flask.testing import FlaskClient

from taskboard.app import create_app
from taskboard.services.task_service import TaskService
from taskboard.stores.task_store import TaskStore

BASE_CONFIG = {
    "TESTING": True,
    "SECRET_KEY": "test-secret",
    "JWT_SECRET_KEY": "test-jwt-secret-with-enough-bytes-for-hs256",
    "JWT_ACCESS_TOKEN_EXPIRES": timedelta(hours=1),
    "MONGO_DB_NAME": "taskboard_test",
    # Lowest cost bcrypt accepts; keeps the suite fast
    "BCRYPT_ROUNDS": 4,
    "AUTH_COOKIE_SECURE": True,
    "LOG_LEVEL": "DEBUG",
}


@pytest.fixture()
def mongo_client() -> mongomock.MongoClient:
    """In-memory MongoDB stand-in, fresh for every test."""
    return mongomock.MongoClient()


@pytest.fixture()
def app(mongo_client) -> Flask:
    return create_app(dict(BASE_CONFIG, AUTH_MODE="token"), mongo_client=mongo_client)


@pytest.fixture()
def session_app(mongo_client) -> Flask:
    return create_app(dict(BASE_CONFIG, AUTH_MODE="session"), mongo_client=mongo_client)


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()


@pytest.fixture()
def session_client(session_app: Flask) -> FlaskClient:
    """
    Test client without a cookie jar.

    Session tests pass the cookie explicitly so they can assert on exactly
    what the server set.
    """
    return session_app.test_client(use_cookies=False)


@pytest.fixture()
def services(app: Flask):
    """Services wired by create_app, used inside an app context (JWTs need one)."""
    with app.app_context():
        yield app.extensions["taskboard"]


@pytest.fixture()
def task_service(mongo_client) -> TaskService:
    store = TaskStore(mongo_client["taskboard_test"])
    store.ensure_indexes()
    return TaskService(store)


@pytest.fixture()
def register(client: FlaskClient) -> Callable[..., dict]:
    """Sign up through the API and return ``{"user": ..., "headers": ...}``."""

    def _register(email="ann@example.com", password="secret1", name="Ann") -> dict:
        resp = client.post("/api/auth/signup", json={"email": email, "password": password, "name": name})
        assert resp.status_code == 201, resp.get_json()
        data = resp.get_json()["data"]
        return {"user": data["user"], "headers": {"Authorization": f"Bearer {data['token']}"}}

    return _register
