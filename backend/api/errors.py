"""
Exception handlers.

Map every failure to the failure envelope. Domain exceptions carry their
own status code; anything unexpected is logged with its traceback and
reported as a generic 500 without internal details.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.envelope import error_response
from shared.exceptions import AuthenticationError, OrionError
from shared.validation import issues_from_errors

logger = logging.getLogger(__name__)


async def orion_error_handler(request: Request, exc: OrionError) -> JSONResponse:
    headers = None
    if isinstance(exc, AuthenticationError):
        headers = {"WWW-Authenticate": "Bearer"}
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.code}: {exc.message}")
    return error_response(
        exc.status_code,
        exc.message,
        code=exc.code,
        details=exc.details or None,
        headers=headers,
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    issues = issues_from_errors(exc.errors())
    return error_response(
        400,
        "Validation failed",
        code="VALIDATION_ERROR",
        details=[issue.model_dump() for issue in issues],
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(
        exc.status_code,
        str(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response(500, "Internal server error", code="INTERNAL_ERROR")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(OrionError, orion_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
