# tests/test_security.py

from datetime import datetime, timedelta, timezone

import pytest

from roombook.core.config import DEV_JWT_SECRET, Settings
from roombook.core.security import (
    InvalidToken,
    TokenService,
    create_password_context,
    get_password_hash,
    verify_password,
)


def test_issue_and_verify_round_trip():
    tokens = TokenService("secret")
    assert tokens.verify(tokens.issue("user-1")) == "user-1"


def test_token_signed_with_other_secret_is_rejected():
    token = TokenService("secret").issue("user-1")
    with pytest.raises(InvalidToken):
        TokenService("another-secret").verify(token)


def test_expired_token_is_rejected():
    tokens = TokenService("secret", expires_delta=timedelta(hours=24))
    token = tokens.issue("user-1", now=datetime.now(timezone.utc) - timedelta(hours=25))
    with pytest.raises(InvalidToken):
        tokens.verify(token)


@pytest.mark.parametrize("token", [None, "", "not-a-jwt", "a.b.c"])
def test_malformed_token_is_rejected(token):
    with pytest.raises(InvalidToken):
        TokenService("secret").verify(token)


def test_password_hash_is_opaque_and_verifiable():
    ctx = create_password_context(rounds=4)
    hashed = get_password_hash(ctx, "hunter2")

    assert hashed != "hunter2"
    assert verify_password(ctx, "hunter2", hashed)
    assert not verify_password(ctx, "hunter3", hashed)


def test_production_requires_jwt_secret():
    with pytest.raises(RuntimeError):
        Settings(environment="production", jwt_secret=None).resolve_jwt_secret()


def test_development_falls_back_to_dev_secret():
    assert Settings(environment="development").resolve_jwt_secret() == DEV_JWT_SECRET


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_HOURS", "2")
    monkeypatch.setenv("ROOMBOOK_ENV", "staging")

    settings = Settings.from_env()

    assert settings.cors_origins == ["https://a.example", "https://b.example"]
    assert settings.token_ttl_hours == 2
    assert settings.environment == "staging"
