"""Shared request data types."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class InboundRequest:
    """Request as received from the browser, headers and query kept as raw bytes."""

    method: str
    headers: list[tuple[bytes, bytes]]
    body: bytes = b""
    query: bytes = b""


@dataclass(frozen=True)
class OutboundRequest:
    """Prepared data for a backend request."""

    method: str
    path: str
    headers: list[tuple[bytes, bytes]]
    body: bytes = b""
    query: bytes = b""


@dataclass(frozen=True)
class BackendResponse:
    """Decoded backend reply."""

    status_code: int
    body: Any
    set_cookies: list[bytes] = field(default_factory=list)
