from __future__ import annotations

from collections.abc import AsyncIterable, AsyncIterator, Iterable, Mapping
from typing import Protocol, runtime_checkable

from starlette.datastructures import Headers
from starlette.requests import ClientDisconnect
from starlette.types import Receive, Scope


@runtime_checkable
class BodySource(Protocol):
    """
    Anything that can hand over a request body chunk by chunk.

    ``starlette.requests.Request`` satisfies this as-is. Exhausting the
    iterator returned by ``stream()`` means end-of-stream; an exception raised
    from it is a transport error. ``headers`` may be any mapping; the
    Content-Type lookup ignores the case of the header name.
    """

    @property
    def headers(self) -> Mapping[str, str]: ...

    def stream(self) -> AsyncIterator[bytes]: ...


def _to_bytes(chunk: bytes | str) -> bytes:
    if isinstance(chunk, str):
        return chunk.encode("utf-8")
    return bytes(chunk)


class StreamBodySource:
    """
    Body source over an in-memory iterable or async iterable of chunks.

    Useful outside an ASGI server (queues, tests, CLI tools). The stream can
    be consumed once.
    """

    def __init__(
        self,
        chunks: Iterable[bytes | str] | AsyncIterable[bytes | str],
        *,
        headers: Mapping[str, str] | None = None,
        content_type: str | None = None,
    ) -> None:
        raw = dict(headers or {})
        if content_type is not None:
            raw = {k: v for k, v in raw.items() if k.lower() != "content-type"}
            raw["content-type"] = content_type
        self._headers = Headers(headers=raw)
        self._chunks = chunks
        self._consumed = False

    @property
    def headers(self) -> Headers:
        return self._headers

    async def stream(self) -> AsyncIterator[bytes]:
        if self._consumed:
            raise RuntimeError("Stream consumed")
        self._consumed = True
        if isinstance(self._chunks, AsyncIterable):
            async for chunk in self._chunks:
                yield _to_bytes(chunk)
        else:
            for chunk in self._chunks:
                yield _to_bytes(chunk)


class ASGIBodySource:
    """Body source reading ``http.request`` messages straight off an ASGI receive channel."""

    def __init__(self, scope: Scope, receive: Receive) -> None:
        if scope.get("type") != "http":
            raise ValueError(f"ASGIBodySource needs an http scope, got {scope.get('type')!r}")
        self._headers = Headers(scope=scope)
        self._receive = receive
        self._consumed = False

    @property
    def headers(self) -> Headers:
        return self._headers

    async def stream(self) -> AsyncIterator[bytes]:
        if self._consumed:
            raise RuntimeError("Stream consumed")
        self._consumed = True
        while True:
            message = await self._receive()
            if message["type"] == "http.request":
                body = message.get("body", b"")
                if body:
                    yield body
                if not message.get("more_body", False):
                    break
            elif message["type"] == "http.disconnect":
                raise ClientDisconnect()


__all__ = ["BodySource", "StreamBodySource", "ASGIBodySource"]
