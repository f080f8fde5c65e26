"""Database model for scored replay trading sessions."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class ReplaySession(SQLModel, table=True):
    """Audit record of one trading session and the rating change it caused."""

    __tablename__ = "replay_sessions"

    id: uuid.UUID = ORMField(default_factory=uuid.uuid4, primary_key=True, nullable=False)
    user_id: uuid.UUID = ORMField(foreign_key="users.id", index=True)
    start_balance: float
    end_balance: float
    percent_gain: float
    delta: int
    created_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["ReplaySession"]
