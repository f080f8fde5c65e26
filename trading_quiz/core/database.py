"""Database component and session helpers."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from fastapi import Request
from sqlalchemy.engine import make_url
from sqlmodel import Session, SQLModel, create_engine

from .config import DatabaseSettings

logger = logging.getLogger(__name__)


class Database:
    """Owns the engine for one process; built at startup, disposed at shutdown."""

    def __init__(self, settings: DatabaseSettings) -> None:
        self.settings = settings
        connect_args: dict = {}
        if settings.is_sqlite:
            connect_args = {"check_same_thread": False}
        elif settings.ssl:
            connect_args = {"sslmode": "require"}
        self.engine = create_engine(
            settings.url, echo=settings.echo, connect_args=connect_args
        )

    def create_all(self) -> None:
        """Create tables, dropping them first when a reset was requested."""

        from .. import models  # noqa: F401 - ensure models are registered with SQLModel

        if self.settings.is_sqlite:
            database = make_url(self.settings.url).database
            if database and database != ":memory:":
                Path(database).parent.mkdir(parents=True, exist_ok=True)

        if self.settings.reset:
            logger.warning("DB_RESET is set, dropping all tables")
            SQLModel.metadata.drop_all(self.engine)
        SQLModel.metadata.create_all(self.engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        with Session(self.engine) as session:
            yield session

    def dispose(self) -> None:
        self.engine.dispose()


def get_session(request: Request) -> Iterator[Session]:
    """FastAPI dependency that yields a database session."""

    database: Database = request.app.state.db
    with database.session() as session:
        yield session


__all__ = ["Database", "get_session"]
