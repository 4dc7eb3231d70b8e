"""
Health check endpoint.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from shared.envelope import SuccessResponse, ok

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str


@router.get("/health", response_model=SuccessResponse[HealthResponse])
async def health_check() -> SuccessResponse[HealthResponse]:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return ok(HealthResponse(status="OK"), "API is healthy")
