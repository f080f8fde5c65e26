"""Service layer helpers."""

from .charts import chart_to_dict, get_random_sample, parse_direction, seed_charts
from .leaderboard import LeaderboardRow, get_leaderboard
from .predictions import PredictionOutcome, submit_prediction
from .rating import score_single_prediction, score_trading_session
from .replay import SessionOutcome, record_trading_session

__all__ = [
    "LeaderboardRow",
    "PredictionOutcome",
    "SessionOutcome",
    "chart_to_dict",
    "get_leaderboard",
    "get_random_sample",
    "parse_direction",
    "record_trading_session",
    "score_single_prediction",
    "score_trading_session",
    "seed_charts",
    "submit_prediction",
]
