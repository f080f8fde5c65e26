"""Prediction grading: the rating change and its audit record commit together."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List

from sqlmodel import Session, select

from ..core.time import isoformat_utc
from ..models import Chart, Prediction
from .charts import get_chart, parse_direction
from .rating import score_single_prediction
from .users import apply_rating_delta, get_user

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PredictionOutcome:
    correct: bool
    delta: int
    new_rating: float
    prediction_id: uuid.UUID

    def to_dict(self) -> Dict[str, Any]:
        return {
            "correct": self.correct,
            "delta": self.delta,
            "newRating": self.new_rating,
        }


def submit_prediction(
    session: Session, user_id: Any, chart_id: Any, guessed_direction: Any
) -> PredictionOutcome:
    """Grade a guess, move the user's rating and record the attempt.

    Raises InvalidInput for a bad direction and NotFound for a missing user or
    chart; in both cases nothing is written.
    """

    guess = parse_direction(guessed_direction)
    user = get_user(session, user_id)
    chart = get_chart(session, chart_id)

    correct = guess == chart.outcome
    delta = score_single_prediction(correct)

    try:
        new_rating = apply_rating_delta(session, user, delta)
        prediction = Prediction(
            user_id=user.id,
            chart_id=chart.id,
            guessed_direction=guess,
            actual_outcome=chart.outcome,
            delta=delta,
        )
        session.add(prediction)
        session.commit()
    except Exception:
        session.rollback()
        raise

    logger.info(
        "User %s predicted %s on chart %s: %s, rating %+d -> %s",
        user.id,
        guess.value,
        chart.id,
        "correct" if correct else "wrong",
        delta,
        new_rating,
    )
    return PredictionOutcome(
        correct=correct,
        delta=delta,
        new_rating=new_rating,
        prediction_id=prediction.id,
    )


def list_predictions(session: Session, user_id: Any, limit: int = 50) -> List[Dict[str, Any]]:
    """Most recent predictions of a user, newest first."""

    user = get_user(session, user_id)
    rows = session.exec(
        select(Prediction, Chart)
        .join(Chart, Chart.id == Prediction.chart_id)
        .where(Prediction.user_id == user.id)
        .order_by(Prediction.created_at.desc())
        .limit(limit)
    ).all()
    return [
        {
            "id": str(prediction.id),
            "chartId": str(chart.id),
            "assetName": chart.asset_name,
            "timeframe": chart.timeframe,
            "prediction": prediction.guessed_direction.value,
            "result": prediction.actual_outcome.value,
            "correct": prediction.correct,
            "delta": prediction.delta,
            "createdAt": isoformat_utc(prediction.created_at),
        }
        for prediction, chart in rows
    ]


__all__ = ["PredictionOutcome", "list_predictions", "submit_prediction"]
