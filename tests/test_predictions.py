"""Tests for prediction submission."""

import threading
import uuid

import pytest
from sqlmodel import select

from trading_quiz.core.errors import InvalidInput, NotFound
from trading_quiz.models import Direction, Prediction, User
from trading_quiz.services import predictions as predictions_service
from trading_quiz.services.leaderboard import get_leaderboard
from trading_quiz.services.predictions import list_predictions, submit_prediction


def _predictions_for(session, user_id):
    return session.exec(select(Prediction).where(Prediction.user_id == user_id)).all()


def test_correct_prediction_adds_sixteen(session, make_user, make_chart):
    user = make_user("alice")
    chart = make_chart(Direction.up)

    outcome = submit_prediction(session, user.id, chart.id, "up")

    assert outcome.correct is True
    assert outcome.delta == 16
    assert outcome.new_rating == 1016
    assert outcome.to_dict() == {"correct": True, "delta": 16, "newRating": 1016}

    session.expire_all()
    assert session.get(User, user.id).rating == 1016
    records = _predictions_for(session, user.id)
    assert len(records) == 1
    assert records[0].chart_id == chart.id
    assert records[0].delta == 16
    assert records[0].guessed_direction == Direction.up
    assert records[0].actual_outcome == Direction.up


def test_wrong_prediction_subtracts_sixteen(session, make_user, make_chart):
    user = make_user("bob")
    chart = make_chart(Direction.down)

    outcome = submit_prediction(session, user.id, chart.id, Direction.up)

    assert outcome.correct is False
    assert outcome.delta == -16
    assert outcome.new_rating == 984
    record = _predictions_for(session, user.id)[0]
    assert record.actual_outcome == Direction.down
    assert record.correct is False


def test_rating_can_go_negative(session, make_user, make_chart):
    user = make_user("carol", rating=8.0)
    chart = make_chart(Direction.down)

    outcome = submit_prediction(session, user.id, chart.id, "up")

    assert outcome.new_rating == -8.0


def test_direction_is_case_insensitive(session, make_user, make_chart):
    user = make_user("dave")
    chart = make_chart(Direction.down)

    assert submit_prediction(session, user.id, chart.id, " DOWN ").correct is True


@pytest.mark.parametrize("bad", ["sideways", "", None, 1])
def test_invalid_direction(session, make_user, make_chart, bad):
    user = make_user("erin")
    chart = make_chart()

    with pytest.raises(InvalidInput):
        submit_prediction(session, user.id, chart.id, bad)

    session.expire_all()
    assert session.get(User, user.id).rating == 1000
    assert _predictions_for(session, user.id) == []


def test_missing_user_changes_nothing(session, make_user, make_chart):
    other = make_user("frank")
    chart = make_chart()

    with pytest.raises(NotFound):
        submit_prediction(session, uuid.uuid4(), chart.id, "up")

    session.expire_all()
    assert session.exec(select(Prediction)).all() == []
    assert session.get(User, other.id).rating == 1000


def test_missing_chart(session, make_user):
    user = make_user("gina")

    with pytest.raises(NotFound):
        submit_prediction(session, user.id, uuid.uuid4(), "up")
    with pytest.raises(NotFound):
        submit_prediction(session, user.id, "not-a-uuid", "up")

    session.expire_all()
    assert session.get(User, user.id).rating == 1000


def test_failed_audit_insert_rolls_back_rating(session, make_user, make_chart, monkeypatch):
    user = make_user("hank")
    chart = make_chart(Direction.up)

    def broken_record(**kwargs):
        raise RuntimeError("audit store unavailable")

    monkeypatch.setattr(predictions_service, "Prediction", broken_record)

    with pytest.raises(RuntimeError):
        submit_prediction(session, user.id, chart.id, "up")

    session.expire_all()
    assert session.get(User, user.id).rating == 1000
    assert _predictions_for(session, user.id) == []


def test_concurrent_submissions_do_not_lose_updates(database, make_user, make_chart):
    user = make_user("ivy")
    chart = make_chart(Direction.up)
    barrier = threading.Barrier(2)
    errors = []

    def worker():
        try:
            with database.session() as worker_session:
                barrier.wait()
                submit_prediction(worker_session, user.id, chart.id, "up")
        except Exception as exc:  # surfaced through the assertion below
            errors.append(exc)

    threads = [threading.Thread(target=worker) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    with database.session() as check:
        assert check.get(User, user.id).rating == 1032
        assert len(_predictions_for(check, user.id)) == 2


def test_scenario_two_right_one_wrong(session, make_user, make_chart):
    make_user("leader", rating=1100)
    player = make_user("player")
    make_user("trailer", rating=1010)
    up_chart = make_chart(Direction.up)
    down_chart = make_chart(Direction.down, image="/charts/b.png")

    submit_prediction(session, player.id, up_chart.id, "up")
    submit_prediction(session, player.id, down_chart.id, "down")
    last = submit_prediction(session, player.id, up_chart.id, "down")

    assert last.new_rating == 1016
    board = get_leaderboard(session)
    assert [row.username for row in board] == ["leader", "player", "trailer"]
    assert board[1].rank == 2
    assert board[1].rating == 1016


def test_history_lists_newest_first(session, make_user, make_chart):
    user = make_user("jack")
    chart = make_chart(Direction.up, asset_name="ETH/USD")

    submit_prediction(session, user.id, chart.id, "down")
    submit_prediction(session, user.id, chart.id, "up")

    history = list_predictions(session, user.id)
    assert [item["prediction"] for item in history] == ["up", "down"]
    assert history[0]["assetName"] == "ETH/USD"
    assert history[0]["correct"] is True
    assert history[1]["delta"] == -16
