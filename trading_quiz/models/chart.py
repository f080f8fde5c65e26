"""Database model for quiz charts."""

from __future__ import annotations

import enum
import uuid
from datetime import datetime

from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class Direction(str, enum.Enum):
    """Price direction after the hidden part of a chart."""

    up = "up"
    down = "down"


class Chart(SQLModel, table=True):
    """Instrument snapshot with a fixed, known outcome."""

    __tablename__ = "charts"

    id: uuid.UUID = ORMField(default_factory=uuid.uuid4, primary_key=True, nullable=False)
    asset_name: str
    timeframe: str
    chart_image_url: str
    outcome: Direction
    created_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["Chart", "Direction"]
