"""Translate backend replies into client responses."""

from fastapi.responses import JSONResponse

from core.request_types import BackendResponse

CLIENT_HEADERS = {"Access-Control-Allow-Origin": "*"}

UNAVAILABLE_STATUS = 503
UNAVAILABLE_BODY = {"error": "Service unavailable"}


def to_client_response(backend: BackendResponse, *, relay_cookies: bool = True) -> JSONResponse:
    """Pass the backend status and body through unchanged."""
    response = JSONResponse(
        content=backend.body,
        status_code=backend.status_code,
        headers=CLIENT_HEADERS,
    )
    if relay_cookies:
        # Raw bytes: cookie values are relayed unchanged.
        response.raw_headers.extend((b"set-cookie", cookie) for cookie in backend.set_cookies)
    return response


def service_unavailable() -> JSONResponse:
    """Fixed degraded-service response for any transport failure."""
    return JSONResponse(
        content=UNAVAILABLE_BODY,
        status_code=UNAVAILABLE_STATUS,
        headers=CLIENT_HEADERS,
    )


def json_response(body: dict, status_code: int = 200) -> JSONResponse:
    """Local (non-relayed) response with the same fixed headers."""
    return JSONResponse(content=body, status_code=status_code, headers=CLIENT_HEADERS)
