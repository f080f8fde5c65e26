"""Quiz endpoints: chart selection, prediction submission, price history."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session

from ...core import Settings, get_session
from ...models import User
from ...services.charts import chart_to_dict, get_random_sample
from ...services.market_data import fetch_price_history
from ...services.predictions import list_predictions, submit_prediction
from ..deps import get_current_user, get_settings

router = APIRouter(prefix="/api/quiz", tags=["quiz"])


@router.get("/random")
def random_chart(
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    """Pick a chart for the next prediction."""

    return chart_to_dict(get_random_sample(session))


@router.post("/submit")
def submit(
    body: Dict[str, Any],
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    """Grade the caller's prediction for a chart."""

    chart_id = body.get("chartId")
    if not chart_id:
        raise HTTPException(400, "chartId is required")

    outcome = submit_prediction(session, user.id, chart_id, body.get("prediction"))
    return outcome.to_dict()


@router.get("/history")
def history(
    limit: int = Query(50, ge=1, le=500),
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    """The caller's most recent predictions."""

    return list_predictions(session, user.id, limit=limit)


@router.get("/btc-history")
async def btc_history(
    days: int = Query(180, ge=1, le=3650),
    settings: Settings = Depends(get_settings),
):
    """Daily BTC/USD prices for the chart, synthetic when the upstream is unavailable."""

    return await fetch_price_history(
        days, url=settings.market_data_url, timeout=settings.market_data_timeout
    )


__all__ = ["router"]
