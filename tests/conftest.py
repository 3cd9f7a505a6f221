import os
import tempfile

_TEST_DIR = tempfile.mkdtemp(prefix="staybnb-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TEST_DIR, 'staybnb.db')}"
os.environ["LOG_FILE"] = os.path.join(_TEST_DIR, "staybnb.log")
os.environ["SECRET_KEY"] = "test-secret-key"

import pytest
from fastapi.testclient import TestClient
from staybnb.database import Base, engine
from staybnb.main import app

PASSWORD = "password123"

SPOT_PAYLOAD = {
    "address": "123 Disney Lane",
    "city": "San Francisco",
    "state": "California",
    "country": "United States of America",
    "lat": 37.7645358,
    "lng": -122.4730327,
    "name": "App Academy",
    "description": "Place where web developers are created",
    "price": 123,
}


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_user(client):
    """Register and log in a user; returns its id and bearer headers"""

    def _make_user(username: str) -> dict:
        response = client.post(
            "/api/auth/register",
            json={
                "firstName": username.title(),
                "lastName": "Tester",
                "email": f"{username}@example.com",
                "username": username,
                "password": PASSWORD,
            },
        )
        assert response.status_code == 201, response.text

        login = client.post("/api/auth/login", json={"credential": username, "password": PASSWORD})
        assert login.status_code == 200, login.text
        body = login.json()
        return {
            "id": body["user"]["id"],
            "headers": {"Authorization": f"Bearer {body['accessToken']}"},
            "refresh_token": body["refreshToken"],
        }

    return _make_user


@pytest.fixture
def make_spot(client):
    def _make_spot(owner: dict, **overrides) -> dict:
        response = client.post("/api/spots", json={**SPOT_PAYLOAD, **overrides}, headers=owner["headers"])
        assert response.status_code == 201, response.text
        return response.json()

    return _make_spot


@pytest.fixture
def host(make_user):
    return make_user("host")


@pytest.fixture
def guest(make_user):
    return make_user("guest")


@pytest.fixture
def spot(host, make_spot):
    return make_spot(host)
