"""Account models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Account(BaseModel):
    """Registered account with its bcrypt password hash."""

    username: str = Field(..., description="Account name (case-sensitive)")
    password_hash: str = Field(..., description="bcrypt hash of the password")


__all__ = ["Account"]
