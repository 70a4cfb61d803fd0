"""Signup and login flow."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import status

from ..models.auth import SignupResponse, TokenResponse
from .auth import AuthService, get_auth_service
from .credentials import CredentialService, get_credential_service

logger = logging.getLogger(__name__)


class AccountError(Exception):
    """Raised when signup or login cannot complete."""

    def __init__(
        self,
        error: str,
        message: str,
        *,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        detail: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.error = error
        self.message = message
        self.status_code = status_code
        self.detail = detail or {}


class AccountService:
    """Joins the credential store and the token authority."""

    def __init__(self, credentials: CredentialService, auth_service: AuthService):
        self.credentials = credentials
        self.auth_service = auth_service

    def signup(self, username: str, password: str) -> SignupResponse:
        self.credentials.register(username, password)
        logger.info(f"Registered account {username!r}")
        return SignupResponse(success=True, message="User registered")

    def login(self, username: str, password: str) -> TokenResponse:
        account = self.credentials.find_by_username(username)
        if account is None:
            logger.info(f"Login failed for {username!r}: unknown user")
            raise AccountError("user_not_found", "User not found")

        if not self.credentials.verify_password(account, password):
            logger.info(f"Login failed for {username!r}: bad password")
            raise AccountError("invalid_credentials", "Invalid credentials")

        token, expires_at = self.auth_service.issue_token(username)
        logger.info(f"Issued token for {username!r} (expires {expires_at.isoformat()})")
        return TokenResponse(token=token)


def get_account_service() -> AccountService:
    """Build the account service over the shared credential store and authority."""
    return AccountService(get_credential_service(), get_auth_service())


__all__ = ["AccountService", "AccountError", "get_account_service"]
