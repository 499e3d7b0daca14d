from __future__ import annotations

import pytest
from starlette.requests import ClientDisconnect, Request

from svc_body.body.reader import read_body
from svc_body.body.sources import ASGIBodySource, BodySource, StreamBodySource
from svc_body.exceptions import SizeLimitExceeded


def _scope(headers: dict[str, str] | None = None) -> dict:
    return {
        "type": "http",
        "method": "POST",
        "path": "/preview-notebook",
        "headers": [(k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in (headers or {}).items()],
    }


def _receive_from(messages: list[dict]):
    pending = list(messages)
    pulled: list[dict] = []

    async def receive() -> dict:
        msg = pending.pop(0)
        pulled.append(msg)
        return msg

    receive.pulled = pulled  # type: ignore[attr-defined]
    return receive


def test_protocol_is_satisfied():
    assert isinstance(StreamBodySource([]), BodySource)
    assert isinstance(ASGIBodySource(_scope(), _receive_from([])), BodySource)
    assert isinstance(Request(_scope(), _receive_from([])), BodySource)


def test_stream_source_content_type_overrides_header():
    src = StreamBodySource([], headers={"Content-Type": "text/plain"}, content_type="application/json")
    assert src.headers["content-type"] == "application/json"
    assert src.headers.getlist("content-type") == ["application/json"]


@pytest.mark.asyncio
async def test_stream_source_is_single_use():
    src = StreamBodySource([b"abc"])
    assert await read_body(src, 10) == "abc"
    with pytest.raises(RuntimeError):
        await read_body(src, 10)


@pytest.mark.asyncio
async def test_asgi_source_reads_multiple_messages():
    receive = _receive_from(
        [
            {"type": "http.request", "body": b"a=1&", "more_body": True},
            {"type": "http.request", "body": b"", "more_body": True},
            {"type": "http.request", "body": b"b=2", "more_body": False},
        ]
    )
    src = ASGIBodySource(_scope({"Content-Type": "application/x-www-form-urlencoded"}), receive)
    assert await read_body(src, 100) == {"a": "1", "b": "2"}


@pytest.mark.asyncio
async def test_asgi_source_disconnect_is_transport_error():
    receive = _receive_from(
        [
            {"type": "http.request", "body": b"abc", "more_body": True},
            {"type": "http.disconnect"},
        ]
    )
    with pytest.raises(ClientDisconnect):
        await read_body(ASGIBodySource(_scope(), receive), 100)


@pytest.mark.asyncio
async def test_asgi_source_stops_receiving_after_breach():
    receive = _receive_from(
        [
            {"type": "http.request", "body": b"x" * 15, "more_body": True},
            {"type": "http.request", "body": b"x" * 15, "more_body": True},
            {"type": "http.request", "body": b"x" * 15, "more_body": False},
        ]
    )
    with pytest.raises(SizeLimitExceeded):
        await read_body(ASGIBodySource(_scope(), receive), 20)
    assert len(receive.pulled) == 2


@pytest.mark.asyncio
async def test_starlette_request_is_a_source():
    receive = _receive_from([{"type": "http.request", "body": b'{"ok": true}', "more_body": False}])
    request = Request(_scope({"content-type": "application/json"}), receive)
    assert await read_body(request, 100) == {"ok": True}


def test_asgi_source_rejects_non_http_scope():
    scope = {**_scope(), "type": "websocket"}
    with pytest.raises(ValueError, match="http scope"):
        ASGIBodySource(scope, _receive_from([]))
