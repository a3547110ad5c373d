"""Shared pytest fixtures."""

import pytest

from scoreroom import create_app
from tests.mock_utils import FakeClock, FakeStore


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def app(store, clock):
    app = create_app(
        {
            "TESTING": True,
            "WTF_CSRF_ENABLED": False,
            "SECRET_KEY": "test",
            "ROOM_STORE": store,
            "CLOCK": clock,
        }
    )
    yield app
    app.extensions["room_sessions"].close_all()
