from .content_type import BodyKind, classify_content_type
from .reader import BodyCallback, decode_body, parse_body, parse_form, parse_json, read_body
from .sources import ASGIBodySource, BodySource, StreamBodySource
from .types import BodyValue, FormBody, JsonValue

__all__ = [
    "BodyKind",
    "classify_content_type",
    "BodyCallback",
    "read_body",
    "parse_body",
    "decode_body",
    "parse_json",
    "parse_form",
    "BodySource",
    "StreamBodySource",
    "ASGIBodySource",
    "BodyValue",
    "FormBody",
    "JsonValue",
]
