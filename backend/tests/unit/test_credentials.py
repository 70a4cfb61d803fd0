import pytest

from backend.src.services.config import AppConfig
from backend.src.services.credentials import CredentialService, InMemoryCredentialStore


@pytest.fixture
def credentials() -> CredentialService:
    config = AppConfig(jwt_secret_key="a-secure-secret-value-123", bcrypt_rounds=4)
    return CredentialService(store=InMemoryCredentialStore(), config=config)


def test_register_stores_hash_not_plaintext(credentials: CredentialService) -> None:
    account = credentials.register("alice", "hunter2")

    assert account.username == "alice"
    assert account.password_hash != "hunter2"
    assert account.password_hash.startswith("$2")


def test_verify_password(credentials: CredentialService) -> None:
    account = credentials.register("alice", "hunter2")

    assert credentials.verify_password(account, "hunter2")
    assert not credentials.verify_password(account, "wrong")


def test_lookup_is_exact_and_case_sensitive(credentials: CredentialService) -> None:
    credentials.register("alice", "pw")

    assert credentials.find_by_username("alice") is not None
    assert credentials.find_by_username("Alice") is None
    assert credentials.find_by_username("ali") is None


def test_duplicate_usernames_are_accepted_first_wins(credentials: CredentialService) -> None:
    first = credentials.register("alice", "one")
    credentials.register("alice", "two")

    assert len(credentials.store) == 2
    found = credentials.find_by_username("alice")
    assert found == first
    assert credentials.verify_password(found, "one")


def test_long_password_is_truncated_to_bcrypt_limit(credentials: CredentialService) -> None:
    password = "x" * 80

    account = credentials.register("alice", password)

    assert credentials.find_by_username("alice") == account
    assert credentials.verify_password(account, password)
    # Bytes past the 72nd are ignored, as bcrypt always has.
    assert credentials.verify_password(account, "x" * 72 + "different")
    assert not credentials.verify_password(account, "y" * 80)
