import os

# Keep PBKDF2 cheap in tests; must be set before core.config is imported
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "1000")

import pytest
from fastapi.testclient import TestClient

ADMIN_LOGIN = "admin"
ADMIN_PASSWORD = "12345"


@pytest.fixture
def directory():
    from directory.users import UserDirectory

    return UserDirectory()


@pytest.fixture
def client(directory):
    from main import create_app

    with TestClient(create_app(directory)) as test_client:
        yield test_client


def login(client: TestClient, user: str, password: str) -> dict:
    """Log in and return bearer headers; the mirrored cookie is dropped."""
    res = client.post("/auth/login", json={"login": user, "password": password})
    assert res.status_code == 200, res.text
    client.cookies.clear()
    return {"Authorization": f"Bearer {res.json()['access_token']}"}


@pytest.fixture
def admin_headers(client):
    return login(client, ADMIN_LOGIN, ADMIN_PASSWORD)
