from . import api, app

# Base exception
from .exceptions import BodyParserError, MalformedBody, SizeLimitExceeded, SvcBodyError

# Body reading
from .body import (
    ASGIBodySource,
    BodyKind,
    BodySource,
    BodyValue,
    StreamBodySource,
    classify_content_type,
    parse_body,
    read_body,
)

__all__ = [
    # Modules
    "app",
    "api",
    # Exceptions
    "SvcBodyError",
    "BodyParserError",
    "SizeLimitExceeded",
    "MalformedBody",
    # Body reading
    "read_body",
    "parse_body",
    "BodySource",
    "StreamBodySource",
    "ASGIBodySource",
    "BodyKind",
    "classify_content_type",
    "BodyValue",
]
