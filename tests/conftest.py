import asyncio
import random

import pytest
from fastapi.testclient import TestClient

from auth.jwt_handler import create_access_token
from config.settings import Settings
from fleet.fleet import FleetRegistry
from main import create_app


class RecordingStore:
    """Keeps every record it is handed; optionally fails or stalls instead."""

    def __init__(self, error=None, delay=0.0):
        self.records = []
        self.calls = 0
        self.error = error
        self.delay = delay

    async def put(self, record):
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        self.records.append(record)

    async def ping(self):
        if self.error is not None:
            raise self.error


@pytest.fixture
def settings():
    return Settings(secret_key="test-secret", store_timeout_seconds=0.5)

@pytest.fixture
def fleet():
    return FleetRegistry.from_dicts([
        {"Name": "Angel", "Color": "White", "Gender": "Female"},
        {"Name": "Gil", "Color": "White", "Gender": "Male"},
        {"Name": "Rocinante", "Color": "Yellow", "Gender": "Female"},
    ])

@pytest.fixture
def make_store():
    return RecordingStore

@pytest.fixture
def store():
    return RecordingStore()

@pytest.fixture
def client(settings, fleet, store):
    app = create_app(settings=settings, fleet=fleet, store=store, rng=random.Random(7))
    return TestClient(app)

@pytest.fixture
def auth_header(settings):
    def make(username="alice"):
        return {"Authorization": f"Bearer {create_access_token(username, settings)}"}
    return make

@pytest.fixture
def pickup_body():
    return {"PickupLocation": {"Latitude": 47.6, "Longitude": -122.3}}
