"""Application configuration helpers."""

from __future__ import annotations

from functools import lru_cache
import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_GEMINI_MODEL = "gemini-1.5-flash"


class AppConfig(BaseModel):
    """Runtime configuration loaded from environment variables."""

    model_config = ConfigDict(frozen=True)

    jwt_secret_key: str = Field(
        ...,
        description="HMAC secret for signing identity tokens",
    )
    token_ttl_seconds: int = Field(
        default=3600, gt=0, description="Lifetime of issued tokens in seconds"
    )
    bcrypt_rounds: int = Field(
        default=10, ge=4, le=31, description="bcrypt cost factor for password hashes"
    )
    gemini_api_key: Optional[str] = Field(
        default=None, description="API key for the Gemini generateContent endpoint"
    )
    gemini_model: str = Field(default=DEFAULT_GEMINI_MODEL)
    gemini_base_url: str = Field(default=DEFAULT_GEMINI_BASE_URL)
    gemini_timeout_seconds: float = Field(
        default=30.0, gt=0, description="Timeout for a single chat completion call"
    )
    cors_origin: str = Field(
        default="http://localhost:3000",
        description="Browser origin allowed to call the API",
    )
    strict_auth: bool = Field(
        default=False,
        description="Require a bearer token on task completion and chat reset too",
    )
    port: int = Field(default=5000)

    @field_validator("jwt_secret_key", mode="before")
    @classmethod
    def _ensure_secret(cls, value: Optional[str]) -> str:
        if value is None:
            raise ValueError("JWT_SECRET is required to issue and verify tokens")
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("JWT_SECRET cannot be empty")
        if len(cleaned) < 16:
            raise ValueError("JWT_SECRET must be at least 16 characters")
        return cleaned

    @field_validator("gemini_api_key", mode="before")
    @classmethod
    def _blank_key_is_unset(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value.strip()

    @field_validator("gemini_base_url", mode="before")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


def _read_env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(key, default)


def _read_flag(key: str, default: str = "false") -> bool:
    return (_read_env(key, default) or "").lower() in {"1", "true", "yes"}


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Load and cache application configuration.

    Raises a ``ValueError`` (pydantic ``ValidationError``) when the token
    secret is missing, so the application refuses to start without one.
    """
    jwt_secret = _read_env("JWT_SECRET", _read_env("JWT_SECRET_KEY"))

    return AppConfig(
        jwt_secret_key=jwt_secret,
        token_ttl_seconds=_read_env("TOKEN_TTL_SECONDS", "3600"),
        bcrypt_rounds=_read_env("BCRYPT_ROUNDS", "10"),
        gemini_api_key=_read_env("GEMINI_API_KEY"),
        gemini_model=_read_env("GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
        gemini_base_url=_read_env("GEMINI_BASE_URL", DEFAULT_GEMINI_BASE_URL),
        gemini_timeout_seconds=_read_env("GEMINI_TIMEOUT_SECONDS", "30"),
        cors_origin=_read_env("CORS_ORIGIN", "http://localhost:3000"),
        strict_auth=_read_flag("STRICT_AUTH"),
        port=_read_env("PORT", "5000"),
    )


def reload_config() -> AppConfig:
    """Clear cached config (useful for tests) and reload."""
    get_config.cache_clear()
    return get_config()


__all__ = ["AppConfig", "get_config", "reload_config"]
