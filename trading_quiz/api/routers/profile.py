"""Profile endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlmodel import Session

from ...core import get_session
from ...models import User
from ...services.users import get_profile
from ..deps import get_current_user

router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.get("/me")
def me(
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    """Rating, rank and prediction statistics of the caller."""

    return get_profile(session, user)


__all__ = ["router"]
