from __future__ import annotations

from typing import TypeAlias, Union

from pydantic import JsonValue

FormBody: TypeAlias = dict[str, str]
BodyValue: TypeAlias = Union[JsonValue, FormBody, str]

__all__ = ["JsonValue", "FormBody", "BodyValue"]
