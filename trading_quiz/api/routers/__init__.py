"""Aggregate API routers."""

from fastapi import APIRouter

from .auth import router as auth_router
from .leaderboard import router as leaderboard_router
from .profile import router as profile_router
from .quiz import router as quiz_router
from .replay import router as replay_router
from .system import router as system_router

ALL_ROUTERS: tuple[APIRouter, ...] = (
    system_router,
    auth_router,
    quiz_router,
    replay_router,
    leaderboard_router,
    profile_router,
)

__all__ = ["ALL_ROUTERS"]
