from fastapi.responses import JSONResponse

from models.ride import ErrorResponse, RideResponse

def _headers(allowed_origin: str, correlation_id: str | None, request_id_header: str) -> dict:
    headers = {"Access-Control-Allow-Origin": allowed_origin}
    if correlation_id:
        headers[request_id_header] = correlation_id
    return headers

def success(payload: RideResponse, allowed_origin: str = "*", correlation_id: str | None = None,
            request_id_header: str = "X-Request-Id", status_code: int = 201) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=payload.model_dump(mode="json"),
        headers=_headers(allowed_origin, correlation_id, request_id_header),
    )

def failure(status_code: int, message: str, correlation_id: str, allowed_origin: str = "*",
            request_id_header: str = "X-Request-Id") -> JSONResponse:
    body = ErrorResponse(Error=message, Reference=correlation_id)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(),
        headers=_headers(allowed_origin, correlation_id, request_id_header),
    )
