from motor.motor_asyncio import AsyncIOMotorClient

from config.settings import Settings

def create_client(settings: Settings) -> AsyncIOMotorClient:
    # timeoutMS bounds each operation inside the driver, the insert included
    timeout_ms = int(settings.store_timeout_seconds * 1000)
    return AsyncIOMotorClient(
        settings.mongodb_url,
        timeoutMS=timeout_ms,
        serverSelectionTimeoutMS=timeout_ms,
        connectTimeoutMS=timeout_ms,
    )

def get_rides_collection(client: AsyncIOMotorClient, settings: Settings):
    return client[settings.mongodb_database][settings.rides_collection]
