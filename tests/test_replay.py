"""Tests for replay session scoring."""

import uuid

import pytest
from sqlmodel import select

from trading_quiz.core.errors import InvalidInput, NotFound
from trading_quiz.models import ReplaySession, User
from trading_quiz.services.replay import record_trading_session


def test_gain_is_scored_and_recorded(session, make_user):
    user = make_user("trader")

    outcome = record_trading_session(session, user.id, 100000, 105000)

    assert outcome.percent_gain == pytest.approx(5.0)
    assert outcome.delta == 50
    assert outcome.new_rating == 1050

    session.expire_all()
    assert session.get(User, user.id).rating == 1050
    record = session.exec(select(ReplaySession)).one()
    assert record.user_id == user.id
    assert record.delta == 50
    assert record.end_balance == 105000


def test_large_loss_is_clamped(session, make_user):
    user = make_user("unlucky")

    outcome = record_trading_session(session, user.id, 100000, 40000)

    assert outcome.delta == -100
    assert outcome.new_rating == 900


def test_bad_balance_writes_nothing(session, make_user):
    user = make_user("broke")

    with pytest.raises(InvalidInput):
        record_trading_session(session, user.id, 0, 100)

    session.expire_all()
    assert session.get(User, user.id).rating == 1000
    assert session.exec(select(ReplaySession)).all() == []


def test_unknown_user(session):
    with pytest.raises(NotFound):
        record_trading_session(session, uuid.uuid4(), 100, 110)
