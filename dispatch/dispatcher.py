"""
Ride dispatch: identity -> body validation -> assignment -> persistence -> response.

Each call is independent. The only shared state is the read-only fleet
behind the selector, so any number of calls may run concurrently.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from pydantic import ValidationError

from dispatch.errors import InvalidInput, PersistenceFailure, Unauthenticated
from dispatch.ride_id import generate_ride_id
from dispatch.selector import AssignmentSelector
from models.ride import RideRecord, RideRequest, RideResponse

logger = logging.getLogger(__name__)

DEFAULT_ETA = "30 seconds"


class RideDispatcher:
    def __init__(
        self,
        selector: AssignmentSelector,
        store,
        store_timeout_seconds: float = 5.0,
        ride_id_factory: Callable[[], str] = generate_ride_id,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.selector = selector
        self.store = store
        self.store_timeout_seconds = store_timeout_seconds
        self.ride_id_factory = ride_id_factory
        self.clock = clock

    async def dispatch(self, username: Optional[str], body: bytes, correlation_id: str) -> RideResponse:
        """
        Raises a DispatchError subclass on any failure; nothing is written
        unless every step before persistence succeeded.
        """
        if not username:
            logger.info("[%s] Rejected ride request without caller identity", correlation_id)
            raise Unauthenticated()

        ride_request = self.parse_request(body, correlation_id)

        ride_id = self.ride_id_factory()
        unicorn = self.selector.select_for(ride_request.PickupLocation)
        logger.debug("[%s] Assigned %s to ride %s", correlation_id, unicorn.Name, ride_id)

        record = RideRecord(RideId=ride_id, User=username, Unicorn=unicorn, RequestTime=self.clock())
        await self.persist(record, correlation_id)

        logger.info("[%s] Ride %s dispatched: %s for %s", correlation_id, ride_id, unicorn.Name, username)
        return RideResponse(RideId=ride_id, Unicorn=unicorn, Eta=DEFAULT_ETA, Rider=username)

    def parse_request(self, body: bytes, correlation_id: str) -> RideRequest:
        if not body:
            logger.warning("[%s] Empty ride request body", correlation_id)
            raise InvalidInput("Request body is required")
        try:
            return RideRequest.model_validate_json(body)
        except ValidationError as e:
            logger.warning("[%s] Invalid ride request: %s", correlation_id, e.errors(include_url=False))
            raise InvalidInput("Request must contain PickupLocation with Latitude and Longitude") from e

    async def persist(self, record: RideRecord, correlation_id: str) -> None:
        try:
            await asyncio.wait_for(self.store.put(record), timeout=self.store_timeout_seconds)
        except asyncio.TimeoutError as e:
            logger.error("[%s] Store write for ride %s timed out after %ss",
                         correlation_id, record.RideId, self.store_timeout_seconds)
            raise PersistenceFailure() from e
        except Exception as e:
            logger.exception("[%s] Store write for ride %s failed", correlation_id, record.RideId)
            raise PersistenceFailure() from e
