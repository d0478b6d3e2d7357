"""Low-level POST backend built on ``http.client`` connections.

Unlike the fetch-style backend, every step of the exchange is explicit:
the request line and headers (including ``Content-Length``) are written
by hand, the body is sent, and the response is read back chunk by
chunk.  The blocking exchange runs in a worker thread so that awaiting
a post never blocks the event loop.
"""

from __future__ import annotations

import asyncio
import codecs
import http.client
from typing import Callable, Iterable, Optional
from urllib.parse import urlsplit

from loguru import logger

from ..models.enums import Backend
from ..models.post_payload import PostPayload

ConnectionFactory = Callable[..., http.client.HTTPConnection]

DEFAULT_CHUNK_SIZE = 8192


def collect_chunks(chunks: Iterable[bytes]) -> str:
    """Join response chunks into a single string, in delivery order.

    Decoding is incremental so a multi-byte UTF-8 sequence split across
    two chunks still decodes to one character.
    """
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    parts: list[str] = []
    for chunk in chunks:
        parts.append(decoder.decode(chunk))
    parts.append(decoder.decode(b"", final=True))
    return "".join(parts)


class RequestBackend:
    """POST through a manually driven ``http.client`` connection.

    Parameters
    ----------
    http_factory, https_factory: callable, optional
        Called as ``factory(host, port, timeout=...)`` to open a
        connection.  The secure factory is used when the URL scheme is
        ``https``.  Default to :class:`http.client.HTTPConnection` and
        :class:`http.client.HTTPSConnection`.
    timeout: float, optional
        Socket timeout in seconds.  ``None`` waits indefinitely.
    chunk_size: int
        Maximum number of bytes read from the response at a time.
    """

    name = Backend.REQUEST

    def __init__(
        self,
        http_factory: Optional[ConnectionFactory] = None,
        https_factory: Optional[ConnectionFactory] = None,
        *,
        timeout: Optional[float] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self._http_factory = http_factory or http.client.HTTPConnection
        self._https_factory = https_factory or http.client.HTTPSConnection
        self._timeout = timeout
        self._chunk_size = chunk_size

    @property
    def timeout(self) -> Optional[float]:
        return self._timeout

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    def connect(self, payload: PostPayload) -> http.client.HTTPConnection:
        """Open a connection for the payload, secure when the URL is https."""
        factory = self._https_factory if payload.is_secure else self._http_factory
        parts = urlsplit(payload.url)
        return factory(parts.hostname, parts.port, timeout=self._timeout)

    async def post(self, payload: PostPayload) -> str:
        return await asyncio.to_thread(self.exchange, payload)

    def exchange(self, payload: PostPayload) -> str:
        """Perform the blocking request/response exchange for one payload."""
        connection = self.connect(payload)
        try:
            connection.putrequest("POST", payload.target, skip_accept_encoding=True)
            for name, value in payload.headers(with_length=True).items():
                connection.putheader(name, value)
            connection.endheaders()
            connection.send(payload.encoded_body)

            response = connection.getresponse()
            logger.debug("POST {} answered with status {}", payload.url, response.status)
            return collect_chunks(iter(lambda: response.read(self._chunk_size), b""))
        finally:
            connection.close()
