"""Helpers for chart samples."""

from __future__ import annotations

import random
from typing import Any, Dict, Iterable, Mapping, Optional

from sqlmodel import Session, func, select

from ..core.errors import InvalidInput, NotAvailable, NotFound
from ..core.time import isoformat_utc
from ..models import Chart, Direction
from .users import parse_id


def parse_direction(value: Any) -> Direction:
    """Accept ``up``/``down`` in any case; anything else is invalid."""

    if isinstance(value, Direction):
        return value
    if isinstance(value, str):
        try:
            return Direction(value.strip().lower())
        except ValueError:
            pass
    raise InvalidInput("Prediction must be 'up' or 'down'")


def get_chart(session: Session, chart_id: Any) -> Chart:
    chart = session.get(Chart, parse_id(chart_id, "Chart"))
    if not chart:
        raise NotFound("Chart not found")
    return chart


def get_random_sample(session: Session, rng: Optional[random.Random] = None) -> Chart:
    """Pick one chart uniformly at random."""

    total = session.exec(select(func.count(Chart.id))).one()
    if not total:
        raise NotAvailable("No charts available")

    offset = (rng or random).randrange(total)
    return session.exec(
        select(Chart).order_by(Chart.created_at, Chart.id).offset(offset).limit(1)
    ).one()


def create_chart(
    session: Session,
    *,
    asset_name: str,
    timeframe: str,
    chart_image_url: str,
    outcome: Any,
    commit: bool = True,
) -> Chart:
    if not asset_name or not timeframe or not chart_image_url:
        raise InvalidInput("asset_name, timeframe and chart_image_url are required")
    chart = Chart(
        asset_name=asset_name,
        timeframe=timeframe,
        chart_image_url=chart_image_url,
        outcome=parse_direction(outcome),
    )
    session.add(chart)
    if commit:
        session.commit()
        session.refresh(chart)
    return chart


def seed_charts(session: Session, charts: Iterable[Mapping[str, Any]]) -> int:
    """Insert charts not already present; returns how many were added."""

    added = 0
    for item in charts:
        asset_name = item.get("asset_name") or item.get("assetName")
        timeframe = item.get("timeframe")
        image_url = item.get("chart_image_url") or item.get("chartImageUrl")
        existing = session.exec(
            select(Chart).where(
                Chart.asset_name == asset_name,
                Chart.timeframe == timeframe,
                Chart.chart_image_url == image_url,
            )
        ).first()
        if existing:
            continue
        create_chart(
            session,
            asset_name=asset_name,
            timeframe=timeframe,
            chart_image_url=image_url,
            outcome=item.get("outcome") or item.get("result"),
            commit=False,
        )
        session.flush()
        added += 1
    session.commit()
    return added


def chart_to_dict(chart: Chart) -> Dict[str, Any]:
    """Public view of a chart; the outcome stays hidden."""

    return {
        "id": str(chart.id),
        "chartImageUrl": chart.chart_image_url,
        "assetName": chart.asset_name,
        "timeframe": chart.timeframe,
    }


def chart_to_admin_dict(chart: Chart) -> Dict[str, Any]:
    return {
        **chart_to_dict(chart),
        "outcome": chart.outcome.value,
        "createdAt": isoformat_utc(chart.created_at),
    }


__all__ = [
    "chart_to_admin_dict",
    "chart_to_dict",
    "create_chart",
    "get_chart",
    "get_random_sample",
    "parse_direction",
    "seed_charts",
]
