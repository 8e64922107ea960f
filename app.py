"""FastAPI application factory."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from api.handlers import handle_health, make_relay_handler
from core.config import Config
from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from core.routes import HEALTH_PATH, ROUTE_FAMILY, RouteSpec
from services.proxy_service import ProxyService
from services.upstream import BackendClient


def create_app(
    config: Config,
    logger: RequestLogger,
    *,
    routes: tuple[RouteSpec, ...] = ROUTE_FAMILY,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        limits = httpx.Limits(max_connections=100, max_keepalive_connections=20)
        backend_client = httpx.AsyncClient(
            base_url=config.backend.base_url,
            timeout=config.backend.timeout,
            limits=limits,
            transport=transport,
        )
        app.state.proxy_service = ProxyService(
            config=config,
            logger=logger,
            backend=BackendClient(backend_client),
            header_builder=HeaderBuilder(),
        )
        try:
            yield
        finally:
            await backend_client.aclose()

    app = FastAPI(title="Fidex Proxy", version="0.1.0", lifespan=lifespan)

    app.add_api_route(HEALTH_PATH, handle_health, methods=["GET"])
    for route in routes:
        app.add_api_route(
            route.path,
            make_relay_handler(route),
            methods=[route.method],
            name=route.name,
        )

    return app
