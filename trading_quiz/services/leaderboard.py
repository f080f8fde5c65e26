"""Leaderboard ranking."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from sqlmodel import Session, select

from ..core.errors import InvalidInput
from ..models import User

DEFAULT_LIMIT = 100
MAX_LIMIT = 1000


@dataclass(frozen=True)
class LeaderboardRow:
    id: str
    username: str
    rating: float
    rank: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "rating": self.rating,
            "rank": self.rank,
        }


def get_leaderboard(session: Session, limit: int = DEFAULT_LIMIT) -> List[LeaderboardRow]:
    """Top ``limit`` users by rating.

    Equal ratings are ordered by registration time, then id, so repeated calls
    return the same sequence. Rank is the 1-based position in that order.
    """

    if isinstance(limit, bool) or not isinstance(limit, int) or not 1 <= limit <= MAX_LIMIT:
        raise InvalidInput(f"Limit must be between 1 and {MAX_LIMIT}")

    users = session.exec(
        select(User)
        .order_by(User.rating.desc(), User.created_at.asc(), User.id.asc())
        .limit(limit)
    ).all()

    return [
        LeaderboardRow(
            id=str(user.id),
            username=user.username,
            rating=user.rating,
            rank=position,
        )
        for position, user in enumerate(users, start=1)
    ]


__all__ = ["DEFAULT_LIMIT", "LeaderboardRow", "MAX_LIMIT", "get_leaderboard"]
