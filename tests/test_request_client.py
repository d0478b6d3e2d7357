from __future__ import annotations

import asyncio

import pytest

from jsonpost.models import PostPayload
from jsonpost.services.post_service import PostRequest
from jsonpost.services.request_client import RequestBackend, collect_chunks


def _backend(recorder, **kwargs) -> RequestBackend:
    return RequestBackend(http_factory=recorder.http, https_factory=recorder.https, **kwargs)


def test_chunks_accumulate_in_delivery_order(recorder_factory) -> None:
    recorder = recorder_factory(chunks=[b"ab", b"cd", b"ef"])
    poster = PostRequest(request=_backend(recorder))

    result = asyncio.run(poster.post("http://example.com/rpc", "{}"))

    assert result == "abcdef"


def test_request_carries_json_headers_and_byte_length(recorder_factory) -> None:
    recorder = recorder_factory(chunks=[b"ok"])
    body = '{"a":"12"}'
    assert len(body) == 10

    asyncio.run(PostRequest(request=_backend(recorder)).post("http://example.com/rpc?x=1", body))

    connection = recorder.connections[0]
    assert connection.method == "POST"
    assert connection.target == "/rpc?x=1"
    assert connection.headers == {"Content-Type": "application/json", "Content-Length": "10"}
    assert connection.sent == body.encode("utf-8")
    assert connection.closed is True


def test_content_length_counts_utf8_bytes(recorder_factory) -> None:
    recorder = recorder_factory()
    body = '"héllo"'

    asyncio.run(PostRequest(request=_backend(recorder)).post("http://example.com/", body))

    assert recorder.connections[0].headers["Content-Length"] == str(len(body.encode("utf-8")))
    assert recorder.connections[0].headers["Content-Length"] == "8"


@pytest.mark.parametrize(
    ("url", "secure", "host", "port"),
    [
        ("https://node.example.com/v3", True, "node.example.com", None),
        ("http://localhost:8545", False, "localhost", 8545),
    ],
)
def test_scheme_selects_transport(recorder_factory, url: str, secure: bool, host: str, port) -> None:
    recorder = recorder_factory()

    asyncio.run(PostRequest(request=_backend(recorder)).post(url, "{}"))

    connection = recorder.connections[0]
    assert connection.secure is secure
    assert connection.host == host
    assert connection.port == port


def test_empty_path_posts_to_root(recorder_factory) -> None:
    recorder = recorder_factory()

    asyncio.run(PostRequest(request=_backend(recorder)).post("http://localhost:8545", "{}"))

    assert recorder.connections[0].target == "/"


def test_timeout_defaults_to_none(recorder_factory) -> None:
    recorder = recorder_factory()

    asyncio.run(PostRequest(request=_backend(recorder)).post("http://localhost/", "{}"))

    assert recorder.connections[0].timeout is None


def test_error_status_still_resolves_with_body(recorder_factory) -> None:
    recorder = recorder_factory(chunks=[b"internal ", b"error"], status=500)

    result = asyncio.run(PostRequest(request=_backend(recorder)).post("http://localhost/", "{}"))

    assert result == "internal error"


def test_transport_failure_rejects_with_original_error(recorder_factory) -> None:
    failure = ConnectionRefusedError("connection refused")
    recorder = recorder_factory(chunks=[b"partial"], error=failure)
    poster = PostRequest(request=_backend(recorder))

    with pytest.raises(ConnectionRefusedError) as excinfo:
        asyncio.run(poster.post("http://localhost:1/", "{}"))

    assert excinfo.value is failure
    assert recorder.connections[0].closed is True


def test_multibyte_character_split_across_chunks() -> None:
    encoded = "€".encode("utf-8")

    assert collect_chunks([b"price: ", encoded[:1], encoded[1:], b"5"]) == "price: €5"


def test_invalid_utf8_is_replaced() -> None:
    assert collect_chunks([b"ok\xff"]) == "ok�"


def test_exchange_is_usable_without_event_loop(recorder_factory) -> None:
    recorder = recorder_factory(chunks=[b"sync"])
    payload = PostPayload(url="http://localhost/", body="{}")

    assert _backend(recorder).exchange(payload) == "sync"
