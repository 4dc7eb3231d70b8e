"""
Response envelope models.

Every API response is one of two shapes, discriminated by ``success``:

    {"success": true,  "data": ..., "message": ...}
    {"success": false, "error": "...", "message": ..., "code": ...,
     "status_code": ..., "details": ...}

A success envelope never carries ``error`` and a failure envelope never
carries ``data``.
"""

from typing import Any, Generic, Literal, Optional, TypeVar

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

T = TypeVar("T")


class SuccessResponse(BaseModel, Generic[T]):
    """Success envelope wrapping a payload."""

    success: Literal[True] = True
    data: T
    message: Optional[str] = None


class FieldIssue(BaseModel):
    """A single validation problem tied to a field path."""

    path: str = Field(..., description="Dotted path of the offending field")
    message: str = Field(..., description="Human-readable problem description")


class ErrorResponse(BaseModel):
    """Failure envelope."""

    success: Literal[False] = False
    error: str
    message: Optional[str] = None
    code: Optional[str] = None
    status_code: Optional[int] = None
    details: Optional[Any] = None


def ok(data: Any, message: Optional[str] = None) -> SuccessResponse:
    """Build a success envelope."""
    return SuccessResponse(data=data, message=message)


def error_response(
    status_code: int,
    error: str,
    *,
    message: Optional[str] = None,
    code: Optional[str] = None,
    details: Optional[Any] = None,
    headers: Optional[dict[str, str]] = None,
) -> JSONResponse:
    """Build a failure envelope as a JSONResponse with the matching HTTP status."""
    body = ErrorResponse(
        error=error,
        message=message,
        code=code,
        status_code=status_code,
        details=details,
    )
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body.model_dump(exclude_none=True)),
        headers=headers,
    )
