# rides.py

import logging
import uuid

from fastapi import APIRouter, Request

from auth.jwt_handler import get_identity
from dispatch.errors import DispatchError
from rides import responses

logger = logging.getLogger(__name__)

router = APIRouter(tags=["rides"])

def get_correlation_id(request: Request) -> str:
    header = request.app.settings.request_id_header
    return request.headers.get(header) or uuid.uuid4().hex

@router.post("/ride", status_code=201)
async def request_ride(request: Request):
    """Assigns a unicorn to the caller and records the ride."""
    settings = request.app.settings
    correlation_id = get_correlation_id(request)
    reply = dict(
        allowed_origin=settings.allowed_origin,
        request_id_header=settings.request_id_header,
    )
    try:
        username = get_identity(request.headers.get("authorization"), settings)
        body = await request.body()
        ride = await request.app.dispatcher.dispatch(username, body, correlation_id)
    except DispatchError as e:
        return responses.failure(e.status_code, e.message, correlation_id, **reply)
    except Exception:
        logger.exception("[%s] Unexpected error while dispatching ride", correlation_id)
        return responses.failure(500, "Internal error", correlation_id, **reply)
    return responses.success(ride, correlation_id=correlation_id, **reply)

@router.get("/fleet")
async def list_fleet(request: Request):
    """Public list of the unicorns in service."""
    return [member.model_dump(mode="json") for member in request.app.fleet.all_members()]
