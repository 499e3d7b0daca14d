"""Exceptions raised by svc-body."""

from __future__ import annotations


class SvcBodyError(Exception):
    """Base exception for all svc-body errors."""


class BodyParserError(SvcBodyError):
    """A request body could not be turned into a value.

    ``http_code`` is the status an HTTP layer should answer with.
    """

    http_code: int = 400
    code: str = "BAD_REQUEST"
    title: str = "Bad Request"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def httpCode(self) -> int:  # noqa: N802
        return self.http_code

    @property
    def status_code(self) -> int:
        return self.http_code

    def to_problem(self) -> dict[str, object]:
        return {
            "title": self.title,
            "status": self.http_code,
            "detail": self.message,
            "code": self.code,
        }


class SizeLimitExceeded(BodyParserError):
    http_code = 413
    code = "PAYLOAD_TOO_LARGE"
    title = "Payload Too Large"

    def __init__(self, limit: int, received: int, message: str = "Request body is too large") -> None:
        super().__init__(message)
        self.limit = limit
        self.received = received


class MalformedBody(BodyParserError, ValueError):
    http_code = 400
    code = "MALFORMED_BODY"
    title = "Malformed Body"

    def __init__(self, message: str, *, lineno: int | None = None, colno: int | None = None) -> None:
        super().__init__(message)
        self.lineno = lineno
        self.colno = colno


__all__ = ["SvcBodyError", "BodyParserError", "SizeLimitExceeded", "MalformedBody"]
