"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class Principal(BaseModel):
    """
    Represents an authenticated user in the system.

    Resolved from a verified credential token plus a storage read, and
    made available to route handlers via dependency injection. Never
    carries the password hash.
    """

    id: str = Field(..., description="User ID")
    email: EmailStr = Field(..., description="User's email address")
    name: str = Field(default="", description="Display name")
    image: Optional[str] = Field(None, description="Avatar URL")
    email_verified: Optional[bool] = Field(None, description="Whether email is verified")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",  # Ignore storage-only columns
    }
