"""Leaderboard endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from ...core import get_session
from ...services.leaderboard import DEFAULT_LIMIT, MAX_LIMIT, get_leaderboard

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/leaderboard", tags=["leaderboard"])


@router.get("")
def leaderboard(
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    session: Session = Depends(get_session),
):
    """Users ranked by rating."""

    rows = get_leaderboard(session, limit=limit)
    logger.debug("Leaderboard returned %d users", len(rows))
    return [row.to_dict() for row in rows]


__all__ = ["router"]
