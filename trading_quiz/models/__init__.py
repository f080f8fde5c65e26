"""Database model exports."""

from .chart import Chart, Direction
from .prediction import Prediction
from .replay import ReplaySession
from .user import INITIAL_RATING, User

__all__ = [
    "Chart",
    "Direction",
    "INITIAL_RATING",
    "Prediction",
    "ReplaySession",
    "User",
]
