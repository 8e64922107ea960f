"""FastAPI route handlers."""

from collections.abc import Awaitable, Callable

from fastapi import Request, Response

from core.request_types import InboundRequest
from core.routes import RouteSpec
from services.responses import json_response

HEALTH_BODY = {"message": "Test backend"}


async def read_inbound(request: Request) -> InboundRequest:
    """Capture method, headers, body and query string of the browser request."""
    body = await request.body()
    return InboundRequest(
        method=request.method,
        headers=list(request.headers.raw),
        body=body,
        query=request.scope.get("query_string", b""),
    )


def make_relay_handler(route: RouteSpec) -> Callable[[Request], Awaitable[Response]]:
    """Bind a route to the shared relay pipeline."""

    async def handler(request: Request) -> Response:
        inbound = await read_inbound(request)
        proxy_service = request.app.state.proxy_service
        return await proxy_service.relay(route, inbound)

    handler.__name__ = "relay_" + route.name.replace("-", "_")
    return handler


async def handle_health() -> Response:
    """Answer locally without contacting the backend."""
    return json_response(HEALTH_BODY)
