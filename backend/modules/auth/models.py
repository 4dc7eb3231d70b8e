"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, EmailStr

from shared.models import Principal


class UserRecord(BaseModel):
    """
    A row of the users table.

    Includes the password hash, so it must never be returned from a route.
    Convert with to_principal() before handing it to other layers.
    """

    id: str = Field(..., description="User ID (UUID)")
    email: EmailStr = Field(..., description="Email address")
    name: Optional[str] = Field(None, description="Display name")
    image: Optional[str] = Field(None, description="Avatar URL")
    email_verified: bool = Field(default=False, description="Whether email is verified")
    password: Optional[str] = Field(None, description="bcrypt password hash")
    created_at: Optional[datetime] = Field(None, description="Account creation time")
    updated_at: Optional[datetime] = Field(None, description="Last update time")

    def to_principal(self) -> Principal:
        return Principal(
            id=self.id,
            email=self.email,
            name=self.name or "",
            image=self.image,
            email_verified=True if self.email_verified else None,
        )


class TokenPayload(BaseModel):
    """Claims carried by a credential token."""

    sub: str = Field(..., description="Subject (user ID)")
    email: Optional[str] = Field(None, description="User's email")
    iss: str = Field(..., description="Issuer")
    aud: str = Field(..., description="Audience")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")


class RegisterRequest(BaseModel):
    """Request to create an account."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=255)


class LoginRequest(BaseModel):
    """Request to exchange credentials for a token."""

    email: EmailStr
    password: str = Field(..., min_length=6)


class UpdateProfileRequest(BaseModel):
    """Request to update the caller's profile."""

    name: str = Field(..., min_length=1, max_length=255)


class AuthResult(BaseModel):
    """Returned by login and register."""

    user: Principal
    token: str


class LogoutResult(BaseModel):
    logged_out: bool = True


class DeleteAccountResult(BaseModel):
    deleted: bool = True
