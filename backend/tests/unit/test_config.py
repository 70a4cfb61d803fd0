import pytest

from backend.src.services import config as config_module


@pytest.fixture(autouse=True)
def restore_config_cache():
    """
    Ensure configuration cache is cleared between tests.
    """
    config_module.get_config.cache_clear()
    yield
    config_module.get_config.cache_clear()


def test_get_config_requires_jwt_secret(monkeypatch) -> None:
    monkeypatch.delenv("JWT_SECRET", raising=False)
    monkeypatch.delenv("JWT_SECRET_KEY", raising=False)

    with pytest.raises(ValueError, match="JWT_SECRET is required"):
        config_module.reload_config()


def test_get_config_rejects_short_jwt_secret(monkeypatch) -> None:
    monkeypatch.setenv("JWT_SECRET", "short")

    with pytest.raises(ValueError):
        config_module.reload_config()


def test_get_config_accepts_legacy_secret_name(monkeypatch) -> None:
    monkeypatch.delenv("JWT_SECRET", raising=False)
    monkeypatch.setenv("JWT_SECRET_KEY", "legacy-secret-value-123")

    cfg = config_module.reload_config()

    assert cfg.jwt_secret_key == "legacy-secret-value-123"


def test_get_config_defaults(monkeypatch) -> None:
    monkeypatch.setenv("JWT_SECRET", "  padded-secret-value-123  ")
    for key in (
        "TOKEN_TTL_SECONDS",
        "GEMINI_MODEL",
        "GEMINI_BASE_URL",
        "STRICT_AUTH",
        "PORT",
        "CORS_ORIGIN",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("GEMINI_API_KEY", "   ")

    cfg = config_module.reload_config()

    assert cfg.jwt_secret_key == "padded-secret-value-123"
    assert cfg.token_ttl_seconds == 3600
    assert cfg.gemini_model == "gemini-1.5-flash"
    assert cfg.gemini_base_url == "https://generativelanguage.googleapis.com/v1beta"
    assert cfg.gemini_api_key is None
    assert cfg.strict_auth is False
    assert cfg.port == 5000
    assert cfg.cors_origin == "http://localhost:3000"


def test_get_config_reads_overrides(monkeypatch) -> None:
    monkeypatch.setenv("JWT_SECRET", "a-secure-secret-value-123")
    monkeypatch.setenv("STRICT_AUTH", "true")
    monkeypatch.setenv("BCRYPT_ROUNDS", "12")
    monkeypatch.setenv("GEMINI_BASE_URL", "http://localhost:9999/v1/")

    cfg = config_module.reload_config()

    assert cfg.strict_auth is True
    assert cfg.bcrypt_rounds == 12
    assert cfg.gemini_base_url == "http://localhost:9999/v1"


def test_config_is_frozen(monkeypatch) -> None:
    monkeypatch.setenv("JWT_SECRET", "a-secure-secret-value-123")
    cfg = config_module.reload_config()

    with pytest.raises(Exception):
        cfg.jwt_secret_key = "another-secret-value-456"
