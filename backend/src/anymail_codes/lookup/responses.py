"""JSON responses with an explicit UTF-8 charset."""

from typing import Any, Dict

from fastapi import status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..observability.metrics import lookups_total
from .schemas import ErrorResponse


class UTF8JSONResponse(JSONResponse):
    media_type = "application/json; charset=utf-8"


def json_response(payload: BaseModel, status_code: int = status.HTTP_200_OK) -> UTF8JSONResponse:
    lookups_total.labels(status=str(status_code)).inc()
    content: Dict[str, Any] = payload.model_dump()
    return UTF8JSONResponse(content=content, status_code=status_code)


def error_response(message: str, status_code: int) -> UTF8JSONResponse:
    return json_response(ErrorResponse(error=message), status_code)
