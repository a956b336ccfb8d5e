"""
API exception handlers

Every failed request gets a JSON body in one of the api.schemas.error
shapes plus an X-Request-ID header matching the logged request id:

- RequestValidationError → 422 ValidationErrorResponse
- DomainError            → the error's own status (404 unknown target, ...)
- anything else          → 500
"""

import uuid

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from api.schemas.error import ErrorDetail, ErrorResponse, ValidationErrorResponse
from models.enums import LogCategory
from services.errors import DomainError
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.API)

REQUEST_ID_HEADER = "X-Request-ID"


def _new_request_id() -> str:
    return uuid.uuid4().hex[:12]


def _respond(status_code: int, body: BaseModel, request_id: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body),
        headers={REQUEST_ID_HEADER: request_id}
    )


def _field_path(loc) -> str:
    # First element is the source: body, path, query
    return ".".join(str(part) for part in loc[1:]) or str(loc[0])


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    request_id = _new_request_id()
    errors = [
        {"field": _field_path(e["loc"]), "message": e["msg"], "type": e["type"]}
        for e in exc.errors()
    ]
    log.warn("Request validation failed", path=request.url.path, errors=len(errors), request_id=request_id)

    body = ValidationErrorResponse(
        error=ErrorDetail(
            code="VALIDATION_ERROR",
            message="Request validation failed",
            details={"error_count": len(errors)},
        ),
        validation_errors=errors,
        request_id=request_id,
    )
    return _respond(status.HTTP_422_UNPROCESSABLE_ENTITY, body, request_id)


async def domain_exception_handler(request: Request, exc: DomainError) -> JSONResponse:
    request_id = _new_request_id()
    log.warn(f"{exc.code}: {exc.message}", path=request.url.path, request_id=request_id)

    body = ErrorResponse(
        error=ErrorDetail(code=exc.code, message=exc.message, details=exc.details),
        request_id=request_id,
    )
    return _respond(exc.status_code, body, request_id)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    request_id = _new_request_id()
    log.error("Unhandled API error", path=request.url.path, exception=exc, request_id=request_id)

    body = ErrorResponse(
        error=ErrorDetail(
            code="INTERNAL_SERVER_ERROR",
            message="An unexpected error occurred",
            details={"request_id": request_id},
        ),
        request_id=request_id,
    )
    return _respond(status.HTTP_500_INTERNAL_SERVER_ERROR, body, request_id)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(DomainError, domain_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
