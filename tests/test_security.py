"""Tests for password hashing and tokens."""

from datetime import timedelta

import pytest

from trading_quiz.core import DatabaseSettings, Settings
from trading_quiz.core.security import (
    InvalidToken,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

SETTINGS = Settings(database=DatabaseSettings(url="sqlite://"), jwt_secret="unit-secret")


def test_password_hash_round_trip():
    hashed = hash_password("correct horse")

    assert hashed != "correct horse"
    assert verify_password("correct horse", hashed)
    assert not verify_password("wrong horse", hashed)


def test_long_passwords_are_truncated_consistently():
    long_password = "x" * 100
    hashed = hash_password(long_password)

    assert verify_password(long_password, hashed)


def test_token_round_trip():
    token = create_access_token("user-123", SETTINGS)

    assert decode_access_token(token, SETTINGS) == "user-123"


def test_expired_token_is_rejected():
    token = create_access_token("user-123", SETTINGS, expires_delta=timedelta(seconds=-5))

    with pytest.raises(InvalidToken):
        decode_access_token(token, SETTINGS)


def test_token_signed_with_other_secret_is_rejected():
    other = Settings(database=SETTINGS.database, jwt_secret="someone-else")
    token = create_access_token("user-123", other)

    with pytest.raises(InvalidToken):
        decode_access_token(token, SETTINGS)


def test_garbage_token_is_rejected():
    with pytest.raises(InvalidToken):
        decode_access_token("not.a.jwt", SETTINGS)
