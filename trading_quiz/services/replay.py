"""Scoring of replay trading sessions."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Dict

from sqlmodel import Session

from ..models import ReplaySession
from .rating import percent_gain, score_trading_session
from .users import apply_rating_delta, get_user

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionOutcome:
    percent_gain: float
    delta: int
    new_rating: float
    session_id: uuid.UUID

    def to_dict(self) -> Dict[str, Any]:
        return {
            "percentGain": self.percent_gain,
            "delta": self.delta,
            "newRating": self.new_rating,
        }


def record_trading_session(
    session: Session, user_id: Any, start_balance: float, end_balance: float
) -> SessionOutcome:
    """Score a finished session and apply it to the user's rating."""

    gain = percent_gain(start_balance, end_balance)
    delta = score_trading_session(gain)
    user = get_user(session, user_id)

    try:
        new_rating = apply_rating_delta(session, user, delta)
        record = ReplaySession(
            user_id=user.id,
            start_balance=start_balance,
            end_balance=end_balance,
            percent_gain=gain,
            delta=delta,
        )
        session.add(record)
        session.commit()
    except Exception:
        session.rollback()
        raise

    logger.info(
        "User %s finished a replay session at %.2f%%, rating %+d -> %s",
        user.id,
        gain,
        delta,
        new_rating,
    )
    return SessionOutcome(
        percent_gain=gain,
        delta=delta,
        new_rating=new_rating,
        session_id=record.id,
    )


__all__ = ["SessionOutcome", "record_trading_session"]
