"""Historical price series for the quiz chart."""

from __future__ import annotations

import logging
import math
import random
import time
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)

SYMBOL = "BTCUSD"
DAY_SECONDS = 86400


def generate_synthetic_series(
    points: int = 180,
    *,
    base_price: float = 35000.0,
    interval_seconds: int = DAY_SECONDS,
    volatility: float = 1000.0,
    cycle_amplitude: float = 3000.0,
    cycle_length: float = 20.0,
    drift: float = 30.0,
    end_time: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> List[Dict[str, float]]:
    """Random walk around a sine cycle with a linear drift, ending at ``end_time``."""

    rng = rng or random.Random()
    now = int(time.time()) if end_time is None else end_time
    series: List[Dict[str, float]] = []
    for i in range(points):
        noise = (rng.random() - 0.5) * volatility
        trend = math.sin(i / cycle_length) * cycle_amplitude
        series.append(
            {
                "time": now - (points - i) * interval_seconds,
                "value": base_price + trend + noise + i * drift,
            }
        )
    return series


def _static_payload(days: int, source: str) -> Dict[str, Any]:
    return {
        "symbol": SYMBOL,
        "data": generate_synthetic_series(points=days),
        "source": source,
    }


async def fetch_price_history(
    days: int,
    *,
    url: str,
    timeout: float = 8.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Dict[str, Any]:
    """Fetch ``days`` of USD prices; fall back to synthetic data on any upstream error."""

    end_time = int(time.time())
    params = {
        "vs_currency": "usd",
        "from": end_time - days * DAY_SECONDS,
        "to": end_time,
    }
    headers = {"User-Agent": "TradingQuiz/1.0", "Accept": "application/json"}

    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            r = await client.get(url, params=params, headers=headers)
            r.raise_for_status()
            prices = r.json().get("prices") or []
    except httpx.HTTPStatusError as exc:
        if exc.response.status_code == 429:
            logger.warning("Market data rate limited, using static data")
        else:
            logger.warning("Market data request failed: %s", exc)
        return _static_payload(days, "static-data")
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("Market data request failed: %s", exc)
        return _static_payload(days, "static-data")

    data = [
        {"time": item[0] / 1000, "value": item[1]}
        for item in prices
        if isinstance(item, (list, tuple)) and len(item) >= 2
    ]
    if not data:
        logger.warning("Market data response had no prices, using static data")
        return _static_payload(days, "static-data")

    logger.debug("Fetched %d price points", len(data))
    return {"symbol": SYMBOL, "data": data, "source": "coingecko"}


__all__ = ["SYMBOL", "fetch_price_history", "generate_synthetic_series"]
