"""Relay orchestration: sanitize, forward, translate."""

import time

from fastapi import Response

from core.config import Config
from core.exceptions import BackendError
from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from core.request_types import InboundRequest, OutboundRequest
from core.routes import RouteSpec
from services.responses import UNAVAILABLE_STATUS, service_unavailable, to_client_response
from services.upstream import BackendClient
from ui.log_utils import redact_headers, write_cli_log


class ProxyService:
    """Relay a route's inbound request to the backend and back."""

    def __init__(
        self,
        config: Config,
        logger: RequestLogger,
        backend: BackendClient,
        header_builder: HeaderBuilder,
    ) -> None:
        self._forward_credentials = config.proxy.forward_credentials
        self._debug = config.proxy.debug
        self._log_file = config.logging.log_file
        self._logger = logger
        self._backend = backend
        self._headers = header_builder

    def prepare(self, route: RouteSpec, inbound: InboundRequest) -> OutboundRequest:
        """Build the outbound request for a route."""
        headers = self._headers.build_backend_headers(
            inbound.headers,
            forward_credentials=self._forward_credentials,
        )
        return OutboundRequest(
            method=inbound.method,
            path=route.path,
            headers=headers,
            body=inbound.body,
            query=inbound.query,
        )

    async def relay(self, route: RouteSpec, inbound: InboundRequest) -> Response:
        """Forward once; any backend failure becomes the 503 response."""
        outbound = self.prepare(route, inbound)
        if self._debug:
            write_cli_log(
                "DEBUG",
                f"{outbound.method} {outbound.path}",
                log_file=self._log_file,
                route=route.name,
                headers=redact_headers(outbound.headers),
            )
        started = time.perf_counter()
        try:
            backend = await self._backend.forward(outbound)
        except BackendError as e:
            self._logger.log_error(route.name, UNAVAILABLE_STATUS, str(e))
            return service_unavailable()

        elapsed_ms = (time.perf_counter() - started) * 1000
        self._logger.log_forward(
            route.name,
            outbound.method,
            outbound.path,
            backend.status_code,
            elapsed_ms=elapsed_ms,
        )
        return to_client_response(backend, relay_cookies=self._forward_credentials)
