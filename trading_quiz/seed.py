"""Load quiz charts into the database.

Usage::

    python -m trading_quiz.seed                 # built-in sample set
    python -m trading_quiz.seed --file charts.json

The JSON file holds a list of objects with ``asset_name``, ``timeframe``,
``chart_image_url`` and ``outcome`` (``up`` or ``down``). Charts already
present with the same asset, timeframe and image are skipped.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from sqlmodel import select

from .core import Database, load_settings
from .core.logging import configure_logging
from .models import Chart
from .services.charts import chart_to_admin_dict, seed_charts

logger = logging.getLogger(__name__)

DEFAULT_CHARTS: List[Dict[str, Any]] = [
    {"asset_name": "BTC/USD", "timeframe": "1D", "chart_image_url": "/charts/btc-1d-01.png", "outcome": "up"},
    {"asset_name": "BTC/USD", "timeframe": "4H", "chart_image_url": "/charts/btc-4h-01.png", "outcome": "down"},
    {"asset_name": "ETH/USD", "timeframe": "1D", "chart_image_url": "/charts/eth-1d-01.png", "outcome": "down"},
    {"asset_name": "ETH/USD", "timeframe": "1H", "chart_image_url": "/charts/eth-1h-01.png", "outcome": "up"},
    {"asset_name": "SPY", "timeframe": "1W", "chart_image_url": "/charts/spy-1w-01.png", "outcome": "up"},
    {"asset_name": "EUR/USD", "timeframe": "4H", "chart_image_url": "/charts/eurusd-4h-01.png", "outcome": "down"},
]


def load_chart_file(path: Path) -> List[Dict[str, Any]]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON list of charts")
    return data


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--file", type=Path, help="JSON file with charts to load")
    parser.add_argument("--list", action="store_true", help="print stored charts afterwards")
    args = parser.parse_args(argv)

    settings = load_settings()
    configure_logging(settings.log_level)

    charts = load_chart_file(args.file) if args.file else DEFAULT_CHARTS

    database = Database(settings.database)
    database.create_all()
    try:
        with database.session() as session:
            added = seed_charts(session, charts)
            logger.info("Added %d of %d charts", added, len(charts))
            if args.list:
                for chart in session.exec(select(Chart).order_by(Chart.created_at)).all():
                    print(json.dumps(chart_to_admin_dict(chart)))
    finally:
        database.dispose()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
