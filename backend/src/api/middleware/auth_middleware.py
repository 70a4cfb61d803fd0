"""Authentication dependency helpers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException, status

from ...models.auth import JWTPayload
from ...services.auth import AuthError, AuthService, get_auth_service
from ...services.config import AppConfig, get_config

logger = logging.getLogger(__name__)


def _unauthorized(message: str, error: str = "unauthorized") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"error": error, "message": message},
    )


def _forbidden() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail={"error": "forbidden", "message": "Invalid or expired token"},
    )


@dataclass
class AuthContext:
    """Context extracted from a bearer token."""

    username: str
    token: str
    payload: JWTPayload


def get_auth_context(
    authorization: Annotated[Optional[str], Header(alias="Authorization")] = None,
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthContext:
    """
    Extract and verify the bearer token.

    Raises HTTPException 401 when no bearer token is presented and 403 when
    the token fails verification for any reason.
    """
    if not authorization:
        raise _unauthorized("Authorization header required")

    # Only the segment right after the first space counts as the credential.
    parts = authorization.split(" ")
    scheme = parts[0]
    token = parts[1] if len(parts) > 1 else ""
    if scheme.lower() != "bearer" or not token:
        raise _unauthorized("Authorization header must be in format: Bearer <token>")

    try:
        payload = auth_service.verify(token)
    except AuthError as exc:
        logger.info(f"Rejected token ({exc.error}): {exc.message}")
        raise _forbidden() from exc

    return AuthContext(username=payload.username, token=token, payload=payload)


def get_optional_auth_context(
    authorization: Annotated[Optional[str], Header(alias="Authorization")] = None,
    auth_service: AuthService = Depends(get_auth_service),
    config: AppConfig = Depends(get_config),
) -> Optional[AuthContext]:
    """Gate only when ``STRICT_AUTH`` is enabled; otherwise let the request through."""
    if not config.strict_auth:
        return None
    return get_auth_context(authorization, auth_service)


__all__ = ["AuthContext", "get_auth_context", "get_optional_auth_context"]
