"""Authentication models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Credentials(BaseModel):
    """Username/password pair submitted to signup and login."""

    username: str = Field(..., description="Account name (case-sensitive)")
    password: str = Field(..., description="Plaintext password")


class SignupResponse(BaseModel):
    """Acknowledgement returned after registering an account."""

    success: bool = True
    message: str = "User registered"


class TokenResponse(BaseModel):
    """JWT issuance response."""

    token: str = Field(..., description="JWT access token")


class JWTPayload(BaseModel):
    """JWT claims payload."""

    username: str = Field(..., description="Authenticated account name")
    iat: int = Field(..., description="Issued at timestamp")
    exp: int = Field(..., description="Expiration timestamp")


__all__ = ["Credentials", "SignupResponse", "TokenResponse", "JWTPayload"]
