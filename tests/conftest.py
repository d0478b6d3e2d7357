from __future__ import annotations

import sys
from collections import deque
from pathlib import Path
from typing import Iterable, Optional

import pytest

repo_root = Path(__file__).resolve().parents[1]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))


class FakeResponse:
    """Stand-in for ``http.client.HTTPResponse`` delivering fixed chunks."""

    def __init__(self, chunks: Iterable[bytes], status: int = 200) -> None:
        self.status = status
        self._chunks = deque(chunks)

    def read(self, amt: Optional[int] = None) -> bytes:
        return self._chunks.popleft() if self._chunks else b""


class FakeConnection:
    """Stand-in for ``http.client.HTTPConnection`` recording what is sent."""

    def __init__(
        self,
        host: str,
        port: Optional[int],
        timeout: Optional[float],
        *,
        secure: bool,
        chunks: Iterable[bytes],
        status: int = 200,
        error: Optional[BaseException] = None,
    ) -> None:
        self.host = host
        self.port = port
        self.timeout = timeout
        self.secure = secure
        self.method: Optional[str] = None
        self.target: Optional[str] = None
        self.headers: dict[str, str] = {}
        self.sent = b""
        self.closed = False
        self._response = FakeResponse(chunks, status)
        self._error = error

    def putrequest(self, method: str, url: str, skip_host: bool = False, skip_accept_encoding: bool = False) -> None:
        self.method = method
        self.target = url

    def putheader(self, header: str, *values: str) -> None:
        self.headers[header] = ", ".join(values)

    def endheaders(self, message_body: Optional[bytes] = None) -> None:
        if self._error is not None:
            raise self._error

    def send(self, data: bytes) -> None:
        self.sent += data

    def getresponse(self) -> FakeResponse:
        return self._response

    def close(self) -> None:
        self.closed = True


class ConnectionRecorder:
    """Builds http/https connection factories and keeps every connection opened."""

    def __init__(
        self,
        chunks: Iterable[bytes] = (b"",),
        status: int = 200,
        error: Optional[BaseException] = None,
    ) -> None:
        self.connections: list[FakeConnection] = []
        self._chunks = list(chunks)
        self._status = status
        self._error = error

    def _factory(self, secure: bool):
        def factory(host: str, port: Optional[int], timeout: Optional[float] = None) -> FakeConnection:
            connection = FakeConnection(
                host,
                port,
                timeout,
                secure=secure,
                chunks=self._chunks,
                status=self._status,
                error=self._error,
            )
            self.connections.append(connection)
            return connection

        return factory

    @property
    def http(self):
        return self._factory(secure=False)

    @property
    def https(self):
        return self._factory(secure=True)


@pytest.fixture
def recorder_factory():
    return ConnectionRecorder
