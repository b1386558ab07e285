from __future__ import annotations

import logging
from typing import Any, Dict, Optional, cast

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status
from starlette.exceptions import HTTPException

from ...engine.errors import ChessError, InvalidFen, InvalidInput, InvalidMove, SaveFailed


logger = logging.getLogger(__name__)

# Core error kind -> (status, envelope code)
CHESS_ERROR_CODES = {
    InvalidInput: (status.HTTP_400_BAD_REQUEST, "invalid_input"),
    InvalidFen: (status.HTTP_400_BAD_REQUEST, "invalid_fen"),
    InvalidMove: (status.HTTP_400_BAD_REQUEST, "invalid_move"),
    SaveFailed: (status.HTTP_500_INTERNAL_SERVER_ERROR, "save_failed"),
}


def error_envelope(
    *,
    code: str,
    message: str,
    status_code: int,
    request_id: str,
    field_errors: Optional[list[dict[str, str]]] = None,
) -> JSONResponse:
    payload: Dict[str, Any] = {
        "error": {
            "code": code,
            "message": message,
            "type": "client_error" if status_code < 500 else "server_error",
            "request_id": request_id,
        }
    }
    if field_errors:
        payload["error"]["field_errors"] = field_errors
    return JSONResponse(status_code=status_code, content=payload)


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "")


async def chess_error_handler(request: Request, exc: Exception) -> JSONResponse:
    err = cast(ChessError, exc)
    status_code, code = CHESS_ERROR_CODES.get(
        type(err), (status.HTTP_400_BAD_REQUEST, "bad_request")
    )
    if status_code >= 500:
        logger.error("%s", err, extra={"request_id": _request_id(request)})
    return error_envelope(
        code=code,
        message=str(err),
        status_code=status_code,
        request_id=_request_id(request),
    )


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    http_exc = cast(HTTPException, exc)
    detail = http_exc.detail if isinstance(http_exc.detail, str) else str(http_exc.detail)
    return error_envelope(
        code=_status_to_code(http_exc.status_code),
        message=detail,
        status_code=http_exc.status_code,
        request_id=_request_id(request),
    )


async def request_validation_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    errors = []
    for e in cast(RequestValidationError, exc).errors():
        loc = ".".join(str(p) for p in e.get("loc", []) if p is not None)
        errors.append(
            {
                "field": loc,
                "code": e.get("type", "value_error"),
                "message": e.get("msg", "invalid value"),
            }
        )
    return error_envelope(
        code="unprocessable_entity",
        message="Validation error",
        status_code=422,
        request_id=_request_id(request),
        field_errors=errors or None,
    )


async def exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception", extra={"request_id": _request_id(request)})
    return error_envelope(
        code="internal_error",
        message="Internal Server Error",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        request_id=_request_id(request),
    )


def _status_to_code(status_code: int) -> str:
    codes = {
        400: "bad_request",
        404: "not_found",
        405: "method_not_allowed",
        409: "conflict",
        422: "unprocessable_entity",
    }
    if status_code in codes:
        return codes[status_code]
    if 500 <= status_code < 600:
        return "internal_error"
    return "error"
