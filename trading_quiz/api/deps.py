"""Shared request dependencies."""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, HTTPException, Request
from fastapi.security import OAuth2PasswordBearer
from sqlmodel import Session

from ..core import NotFound, Settings, get_session
from ..core.security import InvalidToken, decode_access_token
from ..models import User
from ..services.users import get_user

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token", auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    settings: Settings = Depends(get_settings),
    session: Session = Depends(get_session),
) -> User:
    """Resolve the bearer token to a stored user."""

    if not token:
        raise HTTPException(
            status_code=401,
            detail="Authentication token required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        user_id = decode_access_token(token, settings)
        return get_user(session, user_id)
    except (InvalidToken, NotFound):
        raise HTTPException(status_code=403, detail="Invalid token")


__all__ = ["get_current_user", "get_settings", "oauth2_scheme"]
