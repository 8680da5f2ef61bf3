# main.py

import logging
import random
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import Settings, load_settings
from database.connection import create_client, get_rides_collection
from database.ride_store import MongoRideStore, RideStoreError
from dispatch.dispatcher import RideDispatcher
from dispatch.selector import AssignmentSelector
from fleet.fleet import FleetRegistry, load_fleet

# Import routers
from rides.rides import router as rides_router

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    fleet: Optional[FleetRegistry] = None,
    store=None,
    rng: Optional[random.Random] = None,
) -> FastAPI:
    """
    Build the dispatch API. Fleet and settings are resolved here so a bad
    configuration fails before any traffic is accepted. Without an injected
    store, a Mongo client is opened on startup and closed on shutdown.
    """
    settings = settings or load_settings()
    fleet = fleet or load_fleet(settings.fleet_file)

    app = FastAPI(title="Wild Rydes Dispatch API", version="1.0.0")
    app.settings = settings
    app.fleet = fleet
    app.mongodb_client = None

    # CORS middleware (browser preflight); dispatch responses also carry the header themselves
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.allowed_origin],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def install_store(ride_store):
        app.ride_store = ride_store
        app.dispatcher = RideDispatcher(
            selector=AssignmentSelector(fleet, rng=rng),
            store=ride_store,
            store_timeout_seconds=settings.store_timeout_seconds,
        )

    if store is not None:
        install_store(store)
    else:
        @app.on_event("startup")
        async def startup_db_client():
            app.mongodb_client = create_client(settings)
            install_store(MongoRideStore(get_rides_collection(app.mongodb_client, settings)))
            logger.info("Ride store ready: %s.%s", settings.mongodb_database, settings.rides_collection)

        @app.on_event("shutdown")
        async def shutdown_db_client():
            if app.mongodb_client is not None:
                app.mongodb_client.close()
                app.mongodb_client = None

    @app.get("/healthz")
    async def healthz():
        try:
            await app.ride_store.ping()
            return {"status": "ok"}
        except RideStoreError as e:
            return {"status": "store_error", "detail": str(e)}

    app.include_router(rides_router)

    logger.info("Dispatch API configured with %d unicorns", len(fleet))
    return app


def build_default_app() -> FastAPI:
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return create_app(settings)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(build_default_app(), host="0.0.0.0", port=8000)
