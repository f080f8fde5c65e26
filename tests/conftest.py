"""Shared fixtures: a throwaway SQLite database per test."""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from trading_quiz.app import create_app
from trading_quiz.core import Database, DatabaseSettings, Settings
from trading_quiz.models import Chart, Direction, User

# Tests that never log in do not need a real bcrypt hash.
_UNUSED_HASH = "not-a-real-hash"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database=DatabaseSettings(url=f"sqlite:///{tmp_path / 'quiz.db'}"),
        jwt_secret="test-secret",
        log_level="WARNING",
        market_data_url="http://market.invalid/range",
        market_data_timeout=1.0,
    )


@pytest.fixture
def database(settings):
    db = Database(settings.database)
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def session(database):
    with database.session() as session:
        yield session


@pytest.fixture
def make_user(session):
    """Insert a user directly; later users get later ``created_at`` values."""

    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    counter = {"n": 0}

    def _make(username, rating=1000.0):
        counter["n"] += 1
        user = User(
            username=username,
            password_hash=_UNUSED_HASH,
            rating=rating,
            created_at=base + timedelta(minutes=counter["n"]),
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make


@pytest.fixture
def make_chart(session):
    def _make(outcome=Direction.up, asset_name="BTC/USD", timeframe="1D", image="/charts/a.png"):
        chart = Chart(
            asset_name=asset_name,
            timeframe=timeframe,
            chart_image_url=image,
            outcome=outcome,
        )
        session.add(chart)
        session.commit()
        session.refresh(chart)
        return chart

    return _make


@pytest.fixture
def client(settings, database):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client):
    """Register a fresh account through the API and return its bearer header."""

    def _register(username="alice", password="hunter22"):
        response = client.post(
            "/api/auth/register", json={"username": username, "password": password}
        )
        assert response.status_code == 201, response.text
        token = response.json()["token"]
        return {"Authorization": f"Bearer {token}"}

    return _register
