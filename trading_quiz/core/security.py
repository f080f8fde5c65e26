"""Password hashing and access-token helpers."""

from __future__ import annotations

from datetime import timedelta
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from .config import Settings
from .time import utcnow

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# bcrypt only looks at the first 72 bytes of the secret.
_BCRYPT_MAX_BYTES = 72


class InvalidToken(Exception):
    """Raised when a bearer token cannot be decoded or lacks a subject."""


def _bcrypt_input(password: str) -> str:
    raw = password.encode("utf-8")
    if len(raw) > _BCRYPT_MAX_BYTES:
        raw = raw[:_BCRYPT_MAX_BYTES]
    return raw.decode("utf-8", errors="ignore")


def hash_password(password: str) -> str:
    return pwd_context.hash(_bcrypt_input(password))


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(_bcrypt_input(plain_password), hashed_password)


def create_access_token(
    subject: str,
    settings: Settings,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Sign a JWT whose ``sub`` claim is the user id."""

    delta = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    payload = {"sub": subject, "exp": utcnow() + delta}
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> str:
    """Return the ``sub`` claim of a valid token."""

    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
    except JWTError as exc:
        raise InvalidToken(str(exc)) from exc

    subject = payload.get("sub")
    if not subject:
        raise InvalidToken("Token has no subject")
    return subject


__all__ = [
    "InvalidToken",
    "create_access_token",
    "decode_access_token",
    "hash_password",
    "pwd_context",
    "verify_password",
]
