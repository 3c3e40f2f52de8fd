"""Shared fixtures for the attendance test suite."""
from datetime import datetime

import pytest
from eth_account import Account

from accessx import create_app, db
from accessx.services import build_services
from accessx.store import MemoryRecordStore


class FakeClock:
    """Settable wall clock injected into the attendance service."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def set(self, value: str) -> None:
        self.now = datetime.strptime(value, '%Y-%m-%d %H:%M')


@pytest.fixture
def clock():
    return FakeClock(datetime(2025, 1, 10, 9, 3))


@pytest.fixture
def store():
    return MemoryRecordStore()


@pytest.fixture
def services(store, clock):
    return build_services(store, clock=clock)


@pytest.fixture
def wallet():
    return Account.create()


@pytest.fixture
def other_wallet():
    return Account.create()


@pytest.fixture
def instructor_wallet():
    return Account.create()


@pytest.fixture
def app(clock):
    """Create test app."""
    app = create_app('testing', clock=clock)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def instructor_token(client, instructor_wallet):
    """Register an instructor and return their access token."""
    client.post('/auth/register', json={
        'email': 'prof@example.edu',
        'password': 'password123',
        'walletAddress': instructor_wallet.address
    })
    response = client.post('/auth/login', json={
        'email': 'prof@example.edu',
        'password': 'password123'
    })
    return response.get_json()['data']['access_token']
