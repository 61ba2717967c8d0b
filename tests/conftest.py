# tests/conftest.py

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from barbershop.availability import FixedAvailability
from barbershop.config import Settings
from barbershop.main import create_app

# a Monday, mid-morning
NOW = datetime(2030, 6, 3, 10, 15)

JOHN = "john@example.com"
JANE = "jane@example.com"
ADMIN = "admin@studio316.com"


class Clock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        MOCK_APPOINTMENTS=0,
        BCRYPT_ROUNDS=4,
        RANDOM_SEED=7,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def clock():
    return Clock(NOW)


@pytest.fixture
def availability():
    return FixedAvailability()


@pytest.fixture
def app(settings, clock, availability):
    return create_app(settings, availability=availability, clock=clock)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def shop(app):
    return app.state.shop


@pytest.fixture
def db(shop):
    with shop.session() as session:
        yield session


def login(client, email, password="password123"):
    resp = client.post("/auth/login", data={"username": email, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest.fixture
def john(client):
    return login(client, JOHN)


@pytest.fixture
def jane(client):
    return login(client, JANE)


@pytest.fixture
def admin(client):
    return login(client, ADMIN)
