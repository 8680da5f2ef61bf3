import asyncio
from datetime import datetime, timezone

import pytest
from bson.errors import InvalidDocument
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError

from config.settings import Settings
from database.connection import create_client
from database.ride_store import DuplicateRideError, MongoRideStore, RideStoreError, RideStoreUnavailable
from models.fleet import FleetMember
from models.ride import RideRecord


class FakeDatabase:
    def __init__(self, error=None):
        self.error = error
        self.commands = []

    async def command(self, name):
        self.commands.append(name)
        if self.error:
            raise self.error
        return {"ok": 1}


class FakeCollection:
    """Enough of an AsyncIOMotorCollection for insert_one on _id."""

    def __init__(self, error=None):
        self.documents = {}
        self.error = error
        self.database = FakeDatabase(error)

    async def insert_one(self, document):
        if self.error:
            raise self.error
        if document["_id"] in self.documents:
            raise DuplicateKeyError("E11000 duplicate key error")
        self.documents[document["_id"]] = document


def make_record(ride_id="abc", user="alice"):
    return RideRecord(
        RideId=ride_id,
        User=user,
        Unicorn=FleetMember(Name="Gil", Color="White", Gender="Male"),
        RequestTime=datetime(2024, 5, 1, 8, 30, tzinfo=timezone.utc),
    )


def test_put_writes_document_layout():
    collection = FakeCollection()
    asyncio.run(MongoRideStore(collection).put(make_record()))

    assert collection.documents["abc"] == {
        "_id": "abc",
        "RideId": "abc",
        "User": "alice",
        "Unicorn": {"Name": "Gil", "Color": "White", "Gender": "Male"},
        "RequestTime": "2024-05-01T08:30:00+00:00",
    }


def test_put_does_not_overwrite_existing_ride():
    collection = FakeCollection()
    store = MongoRideStore(collection)
    asyncio.run(store.put(make_record(user="alice")))

    with pytest.raises(DuplicateRideError):
        asyncio.run(store.put(make_record(user="bob")))
    assert collection.documents["abc"]["User"] == "alice"


def test_put_maps_driver_errors_to_unavailable():
    store = MongoRideStore(FakeCollection(error=ServerSelectionTimeoutError("no servers")))
    with pytest.raises(RideStoreUnavailable):
        asyncio.run(store.put(make_record()))


def test_ping():
    collection = FakeCollection()
    asyncio.run(MongoRideStore(collection).ping())
    assert collection.database.commands == ["ping"]

    with pytest.raises(RideStoreUnavailable):
        asyncio.run(MongoRideStore(FakeCollection(error=ServerSelectionTimeoutError("x"))).ping())


def test_put_maps_encoding_errors_to_store_error():
    store = MongoRideStore(FakeCollection(error=InvalidDocument("cannot encode object")))
    with pytest.raises(RideStoreError):
        asyncio.run(store.put(make_record()))


def test_client_bounds_operations_by_store_timeout():
    client = create_client(Settings(store_timeout_seconds=0.25))
    try:
        assert client.delegate.options.timeout == 0.25
    finally:
        client.close()
