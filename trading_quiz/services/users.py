"""User accounts, rating persistence and profile statistics."""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, func, select

from ..core.errors import Conflict, InvalidInput, NotFound
from ..core.security import hash_password, verify_password
from ..core.time import isoformat_utc
from ..models import INITIAL_RATING, Prediction, User
from .rating import rating_tier, round_half_up

logger = logging.getLogger(__name__)

USERNAME_MAX_LENGTH = 40


def _normalize_username(username: Any) -> str:
    if username is not None and not isinstance(username, str):
        raise InvalidInput("Username must be a string")
    normalized = (username or "").strip()
    if not normalized:
        raise InvalidInput("Username is required")
    if len(normalized) > USERNAME_MAX_LENGTH:
        raise InvalidInput(
            f"Username must be {USERNAME_MAX_LENGTH} characters or less"
        )
    return normalized


def create_user(session: Session, username: Any, password: Any) -> User:
    """Register a player with the starting rating."""

    name = _normalize_username(username)
    if password is not None and not isinstance(password, str):
        raise InvalidInput("Password must be a string")
    if not password:
        raise InvalidInput("Password is required")

    existing = session.exec(select(User).where(User.username == name)).first()
    if existing:
        raise Conflict("Username already exists")

    user = User(username=name, password_hash=hash_password(password), rating=INITIAL_RATING)
    session.add(user)
    try:
        session.commit()
    except IntegrityError as exc:
        # Lost a race with another registration for the same name.
        session.rollback()
        raise Conflict("Username already exists") from exc
    session.refresh(user)
    logger.info("Registered user %s (%s)", user.username, user.id)
    return user


def authenticate_user(
    session: Session, username: Any, password: Any
) -> Optional[User]:
    """Return the user when the credentials match, otherwise ``None``."""

    if not isinstance(username, str) or not isinstance(password, str):
        return None
    name = username.strip()
    if not name or not password:
        return None
    user = session.exec(select(User).where(User.username == name)).first()
    if not user or not verify_password(password, user.password_hash):
        return None
    return user


def parse_id(raw: Any, label: str) -> uuid.UUID:
    if isinstance(raw, uuid.UUID):
        return raw
    try:
        return uuid.UUID(str(raw))
    except (TypeError, ValueError) as exc:
        raise NotFound(f"{label} not found") from exc


def get_user(session: Session, user_id: Any) -> User:
    user = session.get(User, parse_id(user_id, "User"))
    if not user:
        raise NotFound("User not found")
    return user


def apply_rating_delta(session: Session, user: User, delta: int) -> float:
    """Add ``delta`` to the stored rating inside the caller's transaction.

    The increment runs in SQL so two requests for the same user cannot
    overwrite each other's change. Nothing is committed here.
    """

    result = session.execute(
        update(User)
        .where(User.id == user.id)
        .values(rating=User.rating + delta)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        raise Conflict("Rating update could not be applied")
    session.refresh(user)
    return user.rating


def user_to_dict(user: User) -> Dict[str, Any]:
    return {
        "id": str(user.id),
        "username": user.username,
        "rating": user.rating,
    }


def get_profile(session: Session, user: User) -> Dict[str, Any]:
    """Rating, rank and prediction statistics for one player."""

    total = session.exec(
        select(func.count(Prediction.id)).where(Prediction.user_id == user.id)
    ).one()
    correct = session.exec(
        select(func.count(Prediction.id)).where(
            Prediction.user_id == user.id,
            Prediction.guessed_direction == Prediction.actual_outcome,
        )
    ).one()
    # Players sharing a rating share a rank here.
    better = session.exec(
        select(func.count(User.id)).where(User.rating > user.rating)
    ).one()

    win_rate = round_half_up(correct / total * 100) if total else 0

    return {
        **user_to_dict(user),
        "tier": rating_tier(user.rating),
        "totalQuizzes": total,
        "correctPredictions": correct,
        "winRate": win_rate,
        "rank": better + 1,
        "createdAt": isoformat_utc(user.created_at),
    }


__all__ = [
    "USERNAME_MAX_LENGTH",
    "apply_rating_delta",
    "authenticate_user",
    "create_user",
    "get_profile",
    "get_user",
    "parse_id",
    "user_to_dict",
]
