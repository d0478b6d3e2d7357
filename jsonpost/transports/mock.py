"""A mock transport with call expectations, for unit testing JSON-RPC code."""

from __future__ import annotations

import json
from collections import deque
from typing import Any

from pydantic import ValidationError

from ..models.jsonrpc import JsonRpcErrorObject, JsonRpcRequest, JsonRpcResponse
from ..utils.error_handler import MockTransportError

_NO_RESULT = object()


class MockTransport:
    """Transport answering calls from a queue of expectations.

    Each expectation names the JSON-RPC method and params a call must
    carry and either the ``result`` to answer with or an ``error``
    message to answer with a server error.  Expectations are consumed
    in the order they were added.
    """

    def __init__(self) -> None:
        self._calls: deque[tuple[str, Any, Any, str | None]] = deque()

    def expect_call(
        self,
        method: str,
        params: Any,
        result: Any = _NO_RESULT,
        *,
        error: str | None = None,
    ) -> "MockTransport":
        """Queue an expected call.  Exactly one of ``result``/``error`` is required."""
        if (result is _NO_RESULT) == (error is None):
            raise ValueError("expect_call requires exactly one of result or error")
        self._calls.append((method, params, result, error))
        return self

    @property
    def pending(self) -> int:
        return len(self._calls)

    def assert_exhausted(self) -> None:
        if self._calls:
            methods = ", ".join(repr(method) for method, *_ in self._calls)
            raise AssertionError(f"expected calls were never made: {methods}")

    async def call(self, request: bytes) -> bytes:
        return self.respond(request).encode("utf-8")

    def respond(self, request: bytes) -> str:
        """Check ``request`` against the next expectation and build the reply."""
        try:
            parsed = JsonRpcRequest.model_validate(json.loads(request))
        except (ValueError, ValidationError) as exc:
            raise MockTransportError(
                f"invalid request JSON '{request.decode('utf-8', errors='replace')}': {exc}"
            ) from exc

        if not self._calls:
            raise MockTransportError(f"unexpected '{parsed.method}' request")
        method, params, result, error = self._calls.popleft()

        if parsed.method != method:
            raise MockTransportError(
                f"unexpected method, got {parsed.method!r} but expected {method!r}"
            )
        if parsed.params != params:
            raise MockTransportError(
                f"unexpected parameters, got {parsed.params!r} but expected {params!r}"
            )

        if error is not None:
            response = JsonRpcResponse(error=JsonRpcErrorObject(message=error), id=parsed.id)
        else:
            response = JsonRpcResponse(result=result, id=parsed.id)
        return response.to_json()
