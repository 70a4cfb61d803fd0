"""Credential store: username to bcrypt hash records."""

from __future__ import annotations

import abc
import logging
from typing import List, Optional

import bcrypt

from ..models.user import Account
from .config import AppConfig, get_config

logger = logging.getLogger(__name__)

# bcrypt only reads the first 72 bytes; newer releases raise instead of truncating.
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class CredentialStore(abc.ABC):
    """Storage strategy for account records."""

    @abc.abstractmethod
    def add(self, account: Account) -> Account:
        pass

    @abc.abstractmethod
    def find_by_username(self, username: str) -> Optional[Account]:
        """Return the first account registered under ``username``, if any."""
        pass


class InMemoryCredentialStore(CredentialStore):
    """Process-lifetime list of accounts."""

    def __init__(self) -> None:
        self._accounts: List[Account] = []

    def add(self, account: Account) -> Account:
        # Duplicate usernames are accepted; lookups return the earliest.
        self._accounts.append(account)
        return account

    def find_by_username(self, username: str) -> Optional[Account]:
        for account in self._accounts:
            if account.username == username:
                return account
        return None

    def __len__(self) -> int:
        return len(self._accounts)


class CredentialService:
    """Registers accounts and checks passwords with bcrypt."""

    def __init__(
        self,
        store: CredentialStore | None = None,
        config: AppConfig | None = None,
    ) -> None:
        self.config = config or get_config()
        self.store = store or InMemoryCredentialStore()

    def register(self, username: str, password: str) -> Account:
        """Hash ``password`` and append a new account. Never rejects."""
        hashed = bcrypt.hashpw(
            _password_bytes(password), bcrypt.gensalt(rounds=self.config.bcrypt_rounds)
        )
        account = Account(username=username, password_hash=hashed.decode("utf-8"))
        if self.store.find_by_username(username) is not None:
            logger.warning(f"Registering duplicate username {username!r}")
        return self.store.add(account)

    def find_by_username(self, username: str) -> Optional[Account]:
        return self.store.find_by_username(username)

    @staticmethod
    def verify_password(account: Account, password: str) -> bool:
        return bcrypt.checkpw(
            _password_bytes(password), account.password_hash.encode("utf-8")
        )


# Singleton instance for dependency injection
_credential_service: CredentialService | None = None


def get_credential_service() -> CredentialService:
    """Get or create the credential service singleton."""
    global _credential_service
    if _credential_service is None:
        _credential_service = CredentialService()
    return _credential_service


__all__ = [
    "CredentialStore",
    "InMemoryCredentialStore",
    "CredentialService",
    "get_credential_service",
]
