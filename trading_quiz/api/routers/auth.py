"""Registration and login endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import OAuth2PasswordRequestForm
from sqlmodel import Session

from ...core import Settings, get_session
from ...core.security import create_access_token
from ...models import User
from ...services.users import authenticate_user, create_user, user_to_dict
from ..deps import get_settings

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _token_response(user: User, settings: Settings) -> Dict[str, Any]:
    return {
        "token": create_access_token(str(user.id), settings),
        "user": user_to_dict(user),
    }


@router.post("/register", status_code=201)
def register(
    body: Dict[str, Any],
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    """Create an account and return a bearer token for it."""

    user = create_user(session, body.get("username"), body.get("password"))
    return _token_response(user, settings)


@router.post("/login")
def login(
    body: Dict[str, Any],
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    """Exchange username and password for a bearer token."""

    user = authenticate_user(session, body.get("username"), body.get("password"))
    if not user:
        raise HTTPException(401, "Invalid credentials")
    return _token_response(user, settings)


@router.post("/token")
def issue_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    """OAuth2 password flow, used by the interactive API docs."""

    user = authenticate_user(session, form_data.username, form_data.password)
    if not user:
        raise HTTPException(401, "Invalid credentials")
    return {
        "access_token": create_access_token(str(user.id), settings),
        "token_type": "bearer",
    }


__all__ = ["router"]
