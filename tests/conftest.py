# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# Fixtures shared by the whole suite:
# - a fresh SQLite file per test
# - a TestClient bound to an app built with explicit settings
# - helpers to register users and obtain their tokens
# =============================================================================

import os

# Set before any app import so load_settings() never fails in tests
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient

from blog_api.app.core.config import Settings
from blog_api.app.core.security import CredentialService
from blog_api.app.main import create_app


TEST_SECRET = "test-secret"
DEFAULT_PASSWORD = "correct-horse"


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a throwaway database."""
    return Settings(jwt_secret=TEST_SECRET, database_url=str(tmp_path / "blog.db"))


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def credentials():
    return CredentialService(TEST_SECRET)


def register(client, username, email=None, password=DEFAULT_PASSWORD):
    """Register a user and return the new user id."""
    response = client.post(
        "/register",
        json={"username": username, "email": email or f"{username}@example.com", "password": password},
    )
    assert response.status_code == 200, response.text
    return response.json()["userId"]


def login(client, username, password=DEFAULT_PASSWORD):
    response = client.post("/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


@pytest.fixture
def make_user(client):
    """Factory fixture: register + log in, returning (user_id, headers)."""

    def _make(username):
        user_id = register(client, username)
        token = login(client, username)
        return user_id, {"authorization": token}

    return _make


@pytest.fixture
def alice(make_user):
    return make_user("alice")


@pytest.fixture
def bob(make_user):
    return make_user("bob")


@pytest.fixture
def make_post(client):
    def _make(headers, title="Hello world", content="First post body"):
        response = client.post("/posts", json={"title": title, "content": content}, headers=headers)
        assert response.status_code == 200, response.text
        return response.json()["postId"]

    return _make


@pytest.fixture
def make_comment(client):
    def _make(headers, post_id, content="Nice post!"):
        response = client.post("/comments", json={"content": content, "post_id": post_id}, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()["commentId"]

    return _make
