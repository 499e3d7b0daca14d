from __future__ import annotations

import inspect
import json
import logging
from typing import Any, Awaitable, Callable, Optional
from urllib.parse import parse_qsl

from svc_body.app.settings import get_body_settings
from svc_body.body.content_type import BodyKind, classify_content_type
from svc_body.body.sources import BodySource
from svc_body.body.types import BodyValue, FormBody, JsonValue
from svc_body.exceptions import MalformedBody, SizeLimitExceeded

logger = logging.getLogger(__name__)

BodyCallback = Callable[[Optional[BaseException], Optional[BodyValue]], Optional[Awaitable[Any]]]


def _resolve_limit(limit: int | None) -> int:
    if limit is None:
        return get_body_settings().max_bytes
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise ValueError(f"limit must be a positive integer, got {limit!r}")
    if limit <= 0:
        raise ValueError(f"limit must be a positive integer, got {limit!r}")
    return limit


def _reject_constant(name: str) -> Any:
    # NaN / Infinity are not JSON
    raise ValueError(f"Unexpected token {name}")


def parse_json(text: str) -> JsonValue:
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise MalformedBody(f"Malformed JSON body: {e.msg}", lineno=e.lineno, colno=e.colno) from e
    except ValueError as e:
        raise MalformedBody(f"Malformed JSON body: {e}") from e
    except RecursionError as e:
        raise MalformedBody("Malformed JSON body: nesting too deep") from e


def parse_form(text: str) -> FormBody:
    # Values stay strings; a repeated key keeps its last value.
    return dict(parse_qsl(text, keep_blank_values=True))


def content_type_of(source: BodySource) -> str | None:
    """Read the Content-Type hint, matching the header name case-insensitively."""
    headers = source.headers
    value = headers.get("content-type")
    if value is not None:
        return value
    for name, header_value in headers.items():
        if name.lower() == "content-type":
            return header_value
    return None


def decode_body(raw: bytes, content_type: str | None) -> BodyValue:
    """Decode buffered bytes as UTF-8 and dispatch on the Content-Type hint."""
    text = raw.decode("utf-8", errors="replace")
    kind = classify_content_type(content_type)
    logger.debug(
        "Parsing %d byte body as %s",
        len(raw),
        kind,
        extra={"body_kind": str(kind), "content_type": content_type, "received": len(raw)},
    )
    if kind is BodyKind.JSON:
        return parse_json(text)
    if kind is BodyKind.FORM:
        return parse_form(text)
    return text


async def _close(iterator: Any) -> None:
    aclose = getattr(iterator, "aclose", None)
    if aclose is not None:
        await aclose()


async def read_body(source: BodySource, limit: int | None = None) -> BodyValue:
    """
    Buffer the body of ``source`` and parse it.

    The byte count is checked after every chunk; once it goes past ``limit``
    no further chunk is pulled and ``SizeLimitExceeded`` (413) is raised.
    The declared Content-Length is never consulted. Errors raised by the
    source propagate unchanged.

    Returns a JSON value for ``application/json``, a ``dict[str, str]`` for
    ``application/x-www-form-urlencoded`` and the decoded text otherwise.
    """
    max_bytes = _resolve_limit(limit)
    content_type = content_type_of(source)

    chunks: list[bytes] = []
    received = 0
    iterator = source.stream()
    try:
        async for chunk in iterator:
            if not chunk:
                continue
            chunks.append(chunk)
            received += len(chunk)
            if received > max_bytes:
                logger.warning(
                    "Request body exceeded %d bytes",
                    max_bytes,
                    extra={"limit": max_bytes, "received": received, "content_type": content_type},
                )
                raise SizeLimitExceeded(limit=max_bytes, received=received)
    finally:
        await _close(iterator)

    return decode_body(b"".join(chunks), content_type)


async def parse_body(source: BodySource, limit: int | None, callback: BodyCallback) -> None:
    """
    Callback form of :func:`read_body`.

    ``callback(error, value)`` is invoked exactly once: ``(None, value)`` on
    success, ``(exc, None)`` on a size-limit, transport or malformed-body
    error. An awaitable returned by the callback is awaited. Errors raised by
    the callback itself propagate.
    """
    max_bytes = _resolve_limit(limit)
    try:
        value = await read_body(source, max_bytes)
    except Exception as exc:
        outcome = callback(exc, None)
    else:
        outcome = callback(None, value)
    if inspect.isawaitable(outcome):
        await outcome


__all__ = ["BodyCallback", "read_body", "parse_body", "content_type_of", "decode_body", "parse_json", "parse_form"]
