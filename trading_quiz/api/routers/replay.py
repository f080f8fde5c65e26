"""Replay trading session endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from ...core import get_session
from ...models import User
from ...services.replay import record_trading_session
from ..deps import get_current_user

router = APIRouter(prefix="/api/replay", tags=["replay"])


def _number(body: Dict[str, Any], key: str) -> float:
    value = body.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise HTTPException(400, f"{key} must be a number")
    return float(value)


@router.post("/submit")
def submit_session(
    body: Dict[str, Any],
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    """Score a finished replay session against the caller's rating."""

    outcome = record_trading_session(
        session,
        user.id,
        _number(body, "startBalance"),
        _number(body, "endBalance"),
    )
    return outcome.to_dict()


__all__ = ["router"]
