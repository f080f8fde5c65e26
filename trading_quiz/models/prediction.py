"""Database model for graded predictions."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow
from .chart import Direction


class Prediction(SQLModel, table=True):
    """Audit record of one guess; written once and never updated."""

    __tablename__ = "predictions"

    id: uuid.UUID = ORMField(default_factory=uuid.uuid4, primary_key=True, nullable=False)
    user_id: uuid.UUID = ORMField(foreign_key="users.id", index=True)
    chart_id: uuid.UUID = ORMField(foreign_key="charts.id", index=True)
    guessed_direction: Direction
    actual_outcome: Direction
    delta: int
    created_at: datetime = ORMField(default_factory=utcnow)

    @property
    def correct(self) -> bool:
        return self.guessed_direction == self.actual_outcome


__all__ = ["Prediction"]
