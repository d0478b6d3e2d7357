"""Fetch-style POST backend built on httpx.

The whole exchange is a single awaited call: send the body, receive
the response, decode it.  The status code is deliberately not
inspected; a 4xx or 5xx response resolves with its body like any
other.
"""

from __future__ import annotations

from typing import Optional

import httpx
from loguru import logger

from ..models.enums import Backend
from ..models.post_payload import PostPayload


def decode_body(content: bytes) -> str:
    """Decode a response body as UTF-8 whatever charset the server declared."""
    return content.decode("utf-8", errors="replace")


class FetchBackend:
    """POST through a high-level ``httpx.AsyncClient``.

    When a client is supplied it is reused for every call and left open;
    the caller owns its lifecycle.  Otherwise each call opens and closes
    its own client so no state is shared between posts.  ``transport``
    is handed to those owned clients, e.g. an ``httpx.MockTransport``.
    """

    name = Backend.FETCH

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        *,
        timeout: Optional[float] = None,
        follow_redirects: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = client
        self._timeout = timeout
        self._follow_redirects = follow_redirects
        self._transport = transport

    @property
    def timeout(self) -> Optional[float]:
        return self._timeout

    @property
    def follow_redirects(self) -> bool:
        return self._follow_redirects

    async def post(self, payload: PostPayload) -> str:
        if self._client is not None:
            return await self._send(self._client, payload)
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self._timeout),
            follow_redirects=self._follow_redirects,
            transport=self._transport,
        ) as client:
            return await self._send(client, payload)

    async def _send(self, client: httpx.AsyncClient, payload: PostPayload) -> str:
        response = await client.post(
            payload.url,
            headers=payload.headers(),
            content=payload.encoded_body,
        )
        logger.debug("POST {} answered with status {}", payload.url, response.status_code)
        return decode_body(response.content)
