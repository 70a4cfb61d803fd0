"""Token authority: issue and verify signed, time-limited identity tokens."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from fastapi import status
from pydantic import ValidationError

from ..models.auth import JWTPayload
from .config import AppConfig, get_config

logger = logging.getLogger(__name__)

# Verification failure classes. The gate collapses them into one 403.
MALFORMED = "malformed"
BAD_SIGNATURE = "bad_signature"
EXPIRED = "expired"


class AuthError(Exception):
    """Domain-specific authentication error."""

    def __init__(
        self,
        error: str,
        message: str,
        *,
        status_code: int = status.HTTP_401_UNAUTHORIZED,
        detail: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.error = error
        self.message = message
        self.status_code = status_code
        self.detail = detail or {}


class AuthService:
    """Issue and validate HS256 tokens signed with the configured secret."""

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        algorithm: str = "HS256",
    ) -> None:
        self.config = config or get_config()
        self.algorithm = algorithm
        self._secret = self.config.jwt_secret_key
        self.token_ttl = timedelta(seconds=self.config.token_ttl_seconds)

    def _build_payload(
        self, username: str, expires_in: Optional[timedelta] = None
    ) -> JWTPayload:
        now = datetime.now(timezone.utc)
        lifetime = expires_in if expires_in is not None else self.token_ttl
        return JWTPayload(
            username=username,
            iat=int(now.timestamp()),
            exp=int((now + lifetime).timestamp()),
        )

    def issue_token(
        self, username: str, *, expires_in: Optional[timedelta] = None
    ) -> tuple[str, datetime]:
        """Return a signed token for ``username`` and its expiry timestamp."""
        payload = self._build_payload(username, expires_in)
        token = jwt.encode(payload.model_dump(), self._secret, algorithm=self.algorithm)
        expires_at = datetime.fromtimestamp(payload.exp, tz=timezone.utc)
        return token, expires_at

    def create_jwt(
        self, username: str, *, expires_in: Optional[timedelta] = None
    ) -> str:
        """Create a signed JWT for the given account."""
        token, _ = self.issue_token(username, expires_in=expires_in)
        return token

    def verify(self, token: str) -> JWTPayload:
        """
        Check signature and expiry and return the decoded claims.

        Raises AuthError whose ``error`` is one of ``malformed``,
        ``bad_signature`` or ``expired``.
        """
        try:
            decoded = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat"]},
            )
            return JWTPayload(**decoded)
        except jwt.ExpiredSignatureError as exc:
            raise self._rejected(EXPIRED, "Token expired") from exc
        except jwt.InvalidSignatureError as exc:
            raise self._rejected(BAD_SIGNATURE, "Token signature mismatch") from exc
        except (jwt.InvalidTokenError, ValidationError, TypeError) as exc:
            raise self._rejected(MALFORMED, f"Malformed token: {exc}") from exc

    @staticmethod
    def _rejected(error: str, message: str) -> AuthError:
        return AuthError(error, message, status_code=status.HTTP_403_FORBIDDEN)


# Singleton instance for dependency injection
_auth_service: AuthService | None = None


def get_auth_service() -> AuthService:
    """Get or create the token authority singleton."""
    global _auth_service
    if _auth_service is None:
        _auth_service = AuthService()
    return _auth_service


__all__ = [
    "AuthService",
    "AuthError",
    "get_auth_service",
    "MALFORMED",
    "BAD_SIGNATURE",
    "EXPIRED",
]
