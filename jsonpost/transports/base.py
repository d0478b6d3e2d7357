"""Transport protocol shared by the HTTP and mock transports."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Transport(Protocol):
    """A simplex transport for JSON-RPC calls.

    Responses are matched to requests by the transport itself (one HTTP
    exchange per call, for example), so it is unsuitable for duplex
    channels where responses may arrive out of order.
    """

    async def call(self, request: bytes) -> bytes:
        """Send the serialized ``request`` and return the raw response bytes."""
        ...
