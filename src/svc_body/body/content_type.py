from __future__ import annotations

from enum import StrEnum

JSON_MEDIA_TYPE = "application/json"
FORM_MEDIA_TYPE = "application/x-www-form-urlencoded"


class BodyKind(StrEnum):
    JSON = "json"
    FORM = "form"
    TEXT = "text"


def classify_content_type(value: str | None) -> BodyKind:
    """
    Map a Content-Type header onto the parser to use.

    Matching is a case-insensitive substring test, so parameters such as
    ``; charset=utf-8`` are tolerated. JSON wins over form when both appear.
    """
    if not value:
        return BodyKind.TEXT
    lowered = value.lower()
    if JSON_MEDIA_TYPE in lowered:
        return BodyKind.JSON
    if FORM_MEDIA_TYPE in lowered:
        return BodyKind.FORM
    return BodyKind.TEXT
