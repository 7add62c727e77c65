"""
Pytest fixtures for the product backend and gateway
"""

from datetime import datetime, timedelta, timezone

import fakeredis
import pytest

from shopnet.product_service import create_app
from shopnet.store import ProductStore


class SteppingClock:
    """Returns a time one second later on every call"""

    def __init__(self, start=datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self):
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        return current


@pytest.fixture
def redis_client():
    return fakeredis.FakeRedis(server=fakeredis.FakeServer(), decode_responses=True)


@pytest.fixture
def store(redis_client):
    return ProductStore(redis_client, clock=SteppingClock())


@pytest.fixture
def app(store):
    return create_app(config={"OTEL_ENABLED": False}, store=store)


@pytest.fixture
def client(app):
    return app.test_client()
