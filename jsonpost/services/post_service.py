"""Service issuing a JSON POST through whichever HTTP capability is configured.

A :class:`PostRequest` is built with up to two capabilities, a
fetch-style ``httpx`` client and a low-level ``http.client`` connection.
The capability is chosen when :meth:`PostRequest.post` is called.  The
fetch-style client wins when both are present.  When neither is present
the call fails synchronously with :class:`UnsupportedRuntimeError`,
before any awaitable is created.
"""

from __future__ import annotations

from typing import Awaitable, Optional, Protocol, Union

import httpx
from loguru import logger
from pydantic import ValidationError

from ..config.transport_config import TransportConfig, get_transport_config
from ..models.enums import Backend
from ..models.post_payload import PostPayload
from ..utils.error_handler import InvalidRequestError, UnsupportedRuntimeError
from .fetch_client import FetchBackend
from .request_client import RequestBackend


class PostBackend(Protocol):
    """A capability able to POST a payload and return the response text."""

    name: Backend

    async def post(self, payload: PostPayload) -> str:
        ...


class PostRequest:
    """Issue single JSON POST requests and resolve with the response body.

    Parameters
    ----------
    fetch: FetchBackend or httpx.AsyncClient, optional
        The fetch-style capability.  A bare ``httpx.AsyncClient`` is
        wrapped in a :class:`FetchBackend` that reuses it.
    request: RequestBackend, optional
        The low-level capability, used only when ``fetch`` is absent.
    config: TransportConfig, optional
        Settings used to build whichever of the two capabilities was not
        passed explicitly, as named by its ``backend`` setting.  Without
        a config only the explicit capabilities are used.
    """

    def __init__(
        self,
        fetch: Optional[Union[PostBackend, httpx.AsyncClient]] = None,
        request: Optional[PostBackend] = None,
        config: TransportConfig | None = None,
    ) -> None:
        if isinstance(fetch, httpx.AsyncClient):
            fetch = FetchBackend(fetch)
        if config is not None:
            if fetch is None and config.backend in (Backend.AUTO, Backend.FETCH):
                fetch = FetchBackend(
                    timeout=config.request_timeout,
                    follow_redirects=config.follow_redirects,
                )
            if request is None and config.backend in (Backend.AUTO, Backend.REQUEST):
                request = RequestBackend(
                    timeout=config.request_timeout,
                    chunk_size=config.chunk_size,
                )
        self._fetch = fetch
        self._request = request

    @classmethod
    def from_config(cls, config: TransportConfig | None = None) -> "PostRequest":
        """Build the capabilities named by the ``backend`` setting."""

        return cls(config=config or get_transport_config())

    @property
    def available(self) -> list[Backend]:
        """Return the configured capabilities in order of preference."""

        return [backend.name for backend in (self._fetch, self._request) if backend is not None]

    def select_backend(self) -> PostBackend:
        """Return the preferred capability or raise when none is configured."""

        if self._fetch is not None:
            return self._fetch
        if self._request is not None:
            return self._request
        raise UnsupportedRuntimeError()

    def post(self, url: str, body: str) -> Awaitable[str]:
        """POST ``body`` to ``url`` with a JSON content type.

        This is a plain function returning an awaitable, so the absence of
        any capability or a malformed URL raises here immediately.  Awaiting
        the result yields the full response body decoded as UTF-8,
        whatever the status code.  Transport failures are raised from the
        await unchanged.  There is a single attempt with no retry.

        Raises
        ------
        UnsupportedRuntimeError
            When neither capability is configured.
        InvalidRequestError
            When ``url`` is not an absolute http(s) URL.
        """
        backend = self.select_backend()
        try:
            payload = PostPayload(url=url, body=body)
        except ValidationError as exc:
            raise InvalidRequestError(str(exc)) from exc

        logger.debug(
            "POST {} via {} backend ({} bytes)",
            payload.url,
            backend.name.value,
            payload.content_length,
        )
        return self._send(backend, payload)

    @staticmethod
    async def _send(backend: PostBackend, payload: PostPayload) -> str:
        text = await backend.post(payload)
        logger.debug("POST {} returned {} characters", payload.url, len(text))
        return text


def post(
    url: str,
    data: str,
    *,
    fetch: Optional[Union[PostBackend, httpx.AsyncClient]] = None,
    request: Optional[PostBackend] = None,
    config: TransportConfig | None = None,
) -> Awaitable[str]:
    """POST serialized JSON ``data`` to ``url`` and resolve with the body text.

    Explicit ``fetch``/``request`` capabilities take precedence; without
    them the capabilities named by ``config`` (or the environment) are used.
    """
    if fetch is not None or request is not None:
        poster = PostRequest(fetch=fetch, request=request)
    else:
        poster = PostRequest.from_config(config)
    return poster.post(url, data)
