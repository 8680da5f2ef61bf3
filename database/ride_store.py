import logging

from bson.errors import BSONError
from pymongo.errors import DuplicateKeyError, PyMongoError

from models.ride import RideRecord

logger = logging.getLogger(__name__)


class RideStoreError(Exception):
    pass

class DuplicateRideError(RideStoreError):
    pass

class RideStoreUnavailable(RideStoreError):
    pass


class MongoRideStore:
    """
    Ride records keyed by RideId. Writes are plain inserts on _id, so a
    second write with the same RideId is rejected instead of overwriting.
    """

    def __init__(self, collection):
        self.collection = collection

    async def put(self, record: RideRecord) -> None:
        try:
            await self.collection.insert_one(record.to_document())
        except DuplicateKeyError as e:
            raise DuplicateRideError(f"Ride {record.RideId} already exists") from e
        except BSONError as e:
            raise RideStoreError(f"Ride {record.RideId} could not be encoded: {e}") from e
        except PyMongoError as e:
            raise RideStoreUnavailable(str(e)) from e

    async def ping(self) -> None:
        try:
            await self.collection.database.command("ping")
        except PyMongoError as e:
            raise RideStoreUnavailable(str(e)) from e
