"""JSON-RPC transport posting each request to a fixed HTTP endpoint."""

from __future__ import annotations

from typing import Optional

from ..services.post_service import PostRequest
from ..utils.error_handler import TransportError, translate_transport_errors


class HttpTransport:
    """Transport sending every call as one JSON POST to ``url``.

    ``poster`` supplies the HTTP capabilities; by default they are built
    from the environment via :meth:`PostRequest.from_config`.
    """

    def __init__(self, url: str, poster: Optional[PostRequest] = None) -> None:
        self.url = url
        self._poster = poster or PostRequest.from_config()

    @translate_transport_errors
    async def call(self, request: bytes) -> bytes:
        try:
            body = request.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise TransportError("request is not valid UTF-8") from exc
        text = await self._poster.post(self.url, body)
        return text.encode("utf-8")

    def __repr__(self) -> str:
        return f"HttpTransport(url={self.url!r})"
