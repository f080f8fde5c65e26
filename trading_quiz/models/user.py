"""Database model for quiz players."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow

INITIAL_RATING = 1000.0


class User(SQLModel, table=True):
    """Registered player; ``rating`` only changes through the scoring services."""

    __tablename__ = "users"

    id: uuid.UUID = ORMField(default_factory=uuid.uuid4, primary_key=True, nullable=False)
    username: str = ORMField(index=True, unique=True, max_length=40)
    password_hash: str
    rating: float = ORMField(default=INITIAL_RATING, index=True)
    created_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["INITIAL_RATING", "User"]
