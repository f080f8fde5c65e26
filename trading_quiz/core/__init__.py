"""Core configuration and infrastructure helpers."""

from .config import DatabaseSettings, Settings, load_settings
from .database import Database, get_session
from .errors import Conflict, InvalidInput, NotAvailable, NotFound, QuizError
from .time import isoformat_utc, utcnow

__all__ = [
    "Conflict",
    "Database",
    "DatabaseSettings",
    "InvalidInput",
    "NotAvailable",
    "NotFound",
    "QuizError",
    "Settings",
    "get_session",
    "isoformat_utc",
    "load_settings",
    "utcnow",
]
