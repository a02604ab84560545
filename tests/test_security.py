"""Unit tests for password hashing, token minting/verification and duration parsing."""
from datetime import datetime, timedelta, timezone

import pytest

from library_api.core.config import JWTConfig, PasswordConfig, parse_duration
from library_api.core.constants import TokenKind
from library_api.core.security import (
    InvalidTokenError,
    PasswordHasher,
    TokenCodec,
    TokenExpiredError,
    TokenPayload,
)


@pytest.fixture
def hasher():
    return PasswordHasher(PasswordConfig(salt_rounds=4))


@pytest.fixture
def codec():
    return TokenCodec(
        JWTConfig(
            access_token_secret="access-secret",
            refresh_token_secret="refresh-secret",
            access_token_lifetime=timedelta(minutes=15),
            refresh_token_lifetime=timedelta(days=7),
        )
    )


@pytest.fixture
def identity():
    return TokenPayload(user_id="u-1", email="alice@example.com", role="user")


def test_hash_and_verify(hasher):
    hashed = hasher.hash("Password123")

    assert hashed != "Password123"
    assert hasher.verify("Password123", hashed) is True
    assert hasher.verify("Password124", hashed) is False


def test_hash_is_salted(hasher):
    assert hasher.hash("Password123") != hasher.hash("Password123")


def test_hash_rejects_empty_password(hasher):
    with pytest.raises(ValueError):
        hasher.hash("")


def test_verify_never_raises(hasher):
    assert hasher.verify("", "whatever") is False
    assert hasher.verify("Password123", "") is False
    assert hasher.verify("Password123", "not-a-bcrypt-hash") is False


def test_salt_rounds_are_applied(hasher):
    # $bcrypt-sha256$v=2,t=2b,r=<rounds>$...
    assert "r=04" in hasher.hash("Password123").split("$")[2]


def test_long_passwords_sharing_a_prefix_do_not_collide(hasher):
    password = "Password1" + "a" * 80
    other = password + "DIFFERENT9"
    assert PasswordHasher.validate_strength(password).is_valid
    assert PasswordHasher.validate_strength(other).is_valid

    hashed = hasher.hash(password)

    assert hasher.verify(password, hashed) is True
    assert hasher.verify(other, hashed) is False


@pytest.mark.parametrize(
    "password, expected_error",
    [
        ("Pass1", "Password must be at least 8 characters long"),
        ("12345678", "Password must contain at least one letter"),
        ("Password", "Password must contain at least one number"),
        ("a1" * 128, "Password must be at most 255 characters long"),
    ],
)
def test_strength_policy_rejections(password, expected_error):
    result = PasswordHasher.validate_strength(password)

    assert result.is_valid is False
    assert expected_error in result.errors


def test_strength_policy_accepts_reasonable_password():
    result = PasswordHasher.validate_strength("Password123")

    assert result.is_valid is True
    assert result.errors == []


def test_mint_and_verify_round_trip(codec, identity):
    token = codec.mint(identity, TokenKind.ACCESS)

    assert codec.verify(token, TokenKind.ACCESS) == identity


def test_pair_tokens_are_distinct(codec, identity):
    first = codec.mint_pair(identity)
    second = codec.mint_pair(identity)

    assert first.access_token != first.refresh_token
    assert first.refresh_token != second.refresh_token
    assert codec.verify(first.refresh_token, TokenKind.REFRESH) == identity


def test_access_token_is_not_a_refresh_token(codec, identity):
    pair = codec.mint_pair(identity)

    with pytest.raises(InvalidTokenError):
        codec.verify(pair.access_token, TokenKind.REFRESH)
    with pytest.raises(InvalidTokenError):
        codec.verify(pair.refresh_token, TokenKind.ACCESS)


def test_expired_token_is_reported_as_expired(codec, identity):
    issued = datetime.now(timezone.utc) - timedelta(hours=1)
    token = codec.mint(identity, TokenKind.ACCESS, now=issued)

    with pytest.raises(TokenExpiredError):
        codec.verify(token, TokenKind.ACCESS)


def test_tampered_token_is_invalid(codec, identity):
    token = codec.mint(identity, TokenKind.ACCESS)
    header, payload, signature = token.split(".")
    tampered = ".".join([header, payload, signature[::-1]])

    with pytest.raises(InvalidTokenError) as exc_info:
        codec.verify(tampered, TokenKind.ACCESS)
    assert not isinstance(exc_info.value, TokenExpiredError)


def test_garbage_and_empty_tokens_are_invalid(codec):
    with pytest.raises(InvalidTokenError):
        codec.verify("not.a.jwt", TokenKind.ACCESS)
    with pytest.raises(InvalidTokenError):
        codec.verify("", TokenKind.ACCESS)


def test_token_signed_with_other_secret_is_invalid(codec, identity):
    other = TokenCodec(
        JWTConfig(
            access_token_secret="someone-else",
            refresh_token_secret="someone-else-too",
            access_token_lifetime=timedelta(minutes=15),
            refresh_token_lifetime=timedelta(days=7),
        )
    )
    token = other.mint(identity, TokenKind.ACCESS)

    with pytest.raises(InvalidTokenError):
        codec.verify(token, TokenKind.ACCESS)


def test_refresh_expiry_follows_configured_lifetime(codec):
    now = datetime(2024, 1, 1, tzinfo=timezone.utc)

    assert codec.expires_at(TokenKind.REFRESH, now) == datetime(2024, 1, 8)
    assert codec.expires_at(TokenKind.ACCESS, now) == datetime(2024, 1, 1, 0, 15)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("15m", timedelta(minutes=15)),
        ("7d", timedelta(days=7)),
        ("2h", timedelta(hours=2)),
        ("30s", timedelta(seconds=30)),
        ("90", timedelta(seconds=90)),
    ],
)
def test_parse_duration(raw, expected):
    assert parse_duration(raw) == expected


def test_parse_duration_rejects_garbage():
    with pytest.raises(ValueError):
        parse_duration("soon")
