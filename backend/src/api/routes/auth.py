"""Signup and login routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from ...models.auth import Credentials, SignupResponse, TokenResponse
from ...services.accounts import AccountError, AccountService, get_account_service
from ..middleware import domain_error

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/signup", response_model=SignupResponse)
async def signup(
    body: Credentials,
    accounts: AccountService = Depends(get_account_service),
):
    """Register an account. Duplicate usernames are accepted."""
    return accounts.signup(body.username, body.password)


@router.post("/login", response_model=TokenResponse)
async def login(
    body: Credentials,
    accounts: AccountService = Depends(get_account_service),
):
    """Exchange a username/password for a one-hour bearer token."""
    try:
        return accounts.login(body.username, body.password)
    except AccountError as exc:
        raise domain_error(exc) from exc
