from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException
from starlette.requests import Request

from svc_body.body.reader import read_body
from svc_body.body.types import BodyValue
from svc_body.exceptions import BodyParserError


def parsed_body(*, limit: int | None = None):
    """
    Build a dependency that reads and parses the request body.

    Parser errors become ``HTTPException`` carrying the error's status (413
    for an oversized body, 400 for malformed JSON) and a problem body with
    ``title``, ``status``, ``detail`` and ``code``. Transport errors such as
    ``ClientDisconnect`` are left to the framework.
    """

    async def dep(request: Request) -> BodyValue:
        try:
            return await read_body(request, limit)
        except BodyParserError as exc:
            raise HTTPException(status_code=exc.http_code, detail=exc.to_problem()) from exc

    return dep


ParsedBody = Annotated[BodyValue, Depends(parsed_body())]

__all__ = ["parsed_body", "ParsedBody"]
