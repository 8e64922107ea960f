"""HTTP forwarding to the backend service."""

import httpx

from core.exceptions import (
    BackendConnectionError,
    BackendTimeoutError,
    InvalidBackendResponse,
    UnforwardableRequest,
)
from core.request_types import BackendResponse, OutboundRequest


def _reject_constant(name: str):
    # NaN/Infinity cannot be re-serialized as strict JSON for the browser.
    raise ValueError(f"non-standard JSON constant {name}")


class BackendClient:
    """Forward prepared requests to the backend over a shared client.

    The client is created with the backend origin as ``base_url`` and a
    bounded timeout. Exactly one call is made per ``forward``; no retries.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def forward(self, request: OutboundRequest) -> BackendResponse:
        """Send the request and decode the JSON reply.

        Raises:
            BackendTimeoutError: the backend did not answer in time.
            BackendConnectionError: DNS, refused or reset connection.
            InvalidBackendResponse: the body is empty or not JSON.
            UnforwardableRequest: the query string is not valid in a URL.
        """
        try:
            url = httpx.URL(request.path, query=request.query or None)
        except (httpx.InvalidURL, UnicodeDecodeError) as e:
            raise UnforwardableRequest(f"Cannot build backend URL: {e}", path=request.path) from e

        req = self._client.build_request(
            request.method,
            url,
            headers=request.headers,
            content=request.body or None,
        )
        try:
            response = await self._client.send(req)
        except httpx.TimeoutException as e:
            raise BackendTimeoutError(f"Backend timeout: {e}", path=request.path) from e
        except httpx.RequestError as e:
            raise BackendConnectionError(
                f"Backend connection error: {e}", path=request.path
            ) from e

        return BackendResponse(
            status_code=response.status_code,
            body=self._decode(response, request.path),
            set_cookies=[
                value for key, value in response.headers.raw if key.lower() == b"set-cookie"
            ],
        )

    @staticmethod
    def _decode(response: httpx.Response, path: str):
        if not response.content:
            raise InvalidBackendResponse(
                "Backend returned an empty body",
                path=path,
                status_code=response.status_code,
            )
        try:
            return response.json(parse_constant=_reject_constant)
        except ValueError as e:
            raise InvalidBackendResponse(
                f"Backend returned invalid JSON: {e}",
                path=path,
                status_code=response.status_code,
            ) from e
