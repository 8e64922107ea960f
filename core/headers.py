"""Header construction for backend requests."""

from collections.abc import Iterable

RawHeaders = list[tuple[bytes, bytes]]

# Describes the frontend's own address, never the logical client.
HOP_HEADERS = frozenset({b"host"})
CREDENTIAL_HEADERS = frozenset({b"cookie", b"authorization"})


class HeaderBuilder:
    """Build outbound headers for the backend from inbound request headers."""

    def build_backend_headers(
        self,
        headers: Iterable[tuple[bytes, bytes]],
        *,
        forward_credentials: bool = True,
    ) -> RawHeaders:
        """Copy raw header pairs verbatim, dropping host (and credentials when disabled).

        Order, duplicate entries (e.g. several cookie headers) and value bytes
        are preserved.
        """
        dropped = HOP_HEADERS if forward_credentials else HOP_HEADERS | CREDENTIAL_HEADERS
        return [(key, value) for key, value in headers if key.lower() not in dropped]
