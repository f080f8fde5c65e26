"""Rating arithmetic for single predictions and replay trading sessions.

A single prediction is a 50/50 call, so the expected score is fixed at 0.5
whatever the player's current rating; there is no opponent and the classic
two-player expected-score formula does not apply. Trading sessions are scored
separately from their percentage gain and capped so one lucky session cannot
move a rating by more than 100 points.

Stored ratings are unbounded and never rounded; only deltas are integers.
"""

from __future__ import annotations

import math

from ..core.errors import InvalidInput

K_FACTOR = 32
EXPECTED_SCORE = 0.5

SESSION_POINTS_PER_PERCENT = 10
SESSION_DELTA_LIMIT = 100


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward positive infinity.

    Python's ``round`` uses banker's rounding (``round(2.5) == 2``); scores
    use the schoolbook rule instead, so ``2.5 -> 3`` and ``-2.5 -> -2``.
    """

    return int(math.floor(value + 0.5))


def score_single_prediction(correct: bool) -> int:
    """Rating delta for one graded prediction: +16 when right, -16 when wrong."""

    actual = 1.0 if correct else 0.0
    return round_half_up(K_FACTOR * (actual - EXPECTED_SCORE))


def score_trading_session(percent_gain: float) -> int:
    """Rating delta for a replay session, clamped to [-100, 100]."""

    if (
        isinstance(percent_gain, bool)
        or not isinstance(percent_gain, (int, float))
        or not math.isfinite(percent_gain)
    ):
        raise InvalidInput("Percent gain must be a finite number")
    # Clamp before rounding: huge gains overflow to inf once scaled.
    points = percent_gain * SESSION_POINTS_PER_PERCENT
    points = max(-SESSION_DELTA_LIMIT, min(SESSION_DELTA_LIMIT, points))
    return round_half_up(points)


def percent_gain(start_balance: float, end_balance: float) -> float:
    """Percentage change from the starting to the ending balance."""

    if not all(
        isinstance(v, (int, float)) and not isinstance(v, bool) and math.isfinite(v)
        for v in (start_balance, end_balance)
    ):
        raise InvalidInput("Balances must be finite numbers")
    if start_balance <= 0:
        raise InvalidInput("Starting balance must be positive")
    gain = (end_balance - start_balance) / start_balance * 100.0
    if not math.isfinite(gain):
        raise InvalidInput("Balance change is out of range")
    return gain


def rating_tier(rating: float) -> str:
    """Display label for a rating."""

    if rating == 0:
        return "New Player"
    if rating < 1000:
        return "Beginner"
    if rating < 1200:
        return "Intermediate"
    if rating < 1500:
        return "Advanced"
    return "Expert"


__all__ = [
    "EXPECTED_SCORE",
    "K_FACTOR",
    "SESSION_DELTA_LIMIT",
    "percent_gain",
    "rating_tier",
    "round_half_up",
    "score_single_prediction",
    "score_trading_session",
]
