"""Application settings and environment helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Mapping, Optional

from dotenv import load_dotenv
from sqlalchemy.engine import URL

load_dotenv(override=False)

_PROJECT_ROOT = Path(__file__).resolve().parents[2]
_DEFAULT_SQLITE_PATH = _PROJECT_ROOT / "data" / "app.db"

DEFAULT_MARKET_DATA_URL = (
    "https://api.coingecko.com/api/v3/coins/bitcoin/market_chart/range"
)
_DEV_JWT_SECRET = "dev-secret-change-me"


def _get(env: Mapping[str, str], name: str) -> Optional[str]:
    value = env.get(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _require_env(env: Mapping[str, str], name: str) -> str:
    """Return a required environment variable or raise an error."""

    value = _get(env, name)
    if not value:
        raise RuntimeError(f"Missing required environment variable: {name}")
    return value


def _env_bool(env: Mapping[str, str], name: str, default: bool = False) -> bool:
    raw = _get(env, name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = _get(env, name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc


def _env_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = _get(env, name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be a number") from exc


def _split_csv(raw: str | None) -> List[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _unique(values: Iterable[str]) -> List[str]:
    seen = set()
    ordered: List[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


_LOCAL_DEV_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]


@dataclass(frozen=True)
class DatabaseSettings:
    """Resolved connection parameters."""

    url: str
    echo: bool = False
    ssl: bool = False
    reset: bool = False

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")


@dataclass(frozen=True)
class Settings:
    """Typed application configuration, resolved once at startup."""

    database: DatabaseSettings
    app_env: str = "development"
    jwt_secret: str = _DEV_JWT_SECRET
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 24 * 60
    allowed_cors_origins: List[str] = field(default_factory=list)
    log_level: str = "INFO"
    market_data_url: str = DEFAULT_MARKET_DATA_URL
    market_data_timeout: float = 8.0
    port: int = 3001

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


def resolve_database_url(env: Mapping[str, str]) -> str:
    """Pick the connection string.

    ``DATABASE_URL`` wins outright. Otherwise a Postgres URL is assembled from
    the discrete ``DB_*`` fields when ``DB_HOST`` is present, and a local
    SQLite file is used as the last resort.
    """

    url = _get(env, "DATABASE_URL")
    if url:
        # Heroku-style URLs use the legacy scheme name.
        if url.startswith("postgres://"):
            url = "postgresql+psycopg://" + url[len("postgres://"):]
        return url

    host = _get(env, "DB_HOST")
    if host:
        return URL.create(
            "postgresql+psycopg",
            username=_get(env, "DB_USERNAME") or "postgres",
            password=_get(env, "DB_PASSWORD") or "password",
            host=host,
            port=_env_int(env, "DB_PORT", 5432),
            database=_get(env, "DB_NAME") or "trading_quiz",
        ).render_as_string(hide_password=False)

    return f"sqlite:///{_DEFAULT_SQLITE_PATH}"


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build :class:`Settings` from the process environment (or a mapping)."""

    env = os.environ if environ is None else environ

    app_env = (_get(env, "APP_ENV") or "development").lower()
    production = app_env == "production"

    if production:
        jwt_secret = _require_env(env, "JWT_SECRET")
    else:
        jwt_secret = _get(env, "JWT_SECRET") or _DEV_JWT_SECRET

    frontend_origins = _split_csv(_get(env, "FRONTEND_URL")) or [
        "http://localhost:3000"
    ]
    additional_origins = _split_csv(_get(env, "ADDITIONAL_ALLOWED_ORIGINS"))

    database_url = resolve_database_url(env)
    database = DatabaseSettings(
        url=database_url,
        echo=_env_bool(env, "DB_ECHO", False),
        ssl=production and not database_url.startswith("sqlite"),
        reset=_env_bool(env, "DB_RESET", False),
    )

    return Settings(
        database=database,
        app_env=app_env,
        jwt_secret=jwt_secret,
        jwt_algorithm=_get(env, "JWT_ALGORITHM") or "HS256",
        access_token_expire_minutes=_env_int(env, "ACCESS_TOKEN_EXPIRE_MINUTES", 24 * 60),
        allowed_cors_origins=_unique(
            [*frontend_origins, *additional_origins, *_LOCAL_DEV_ORIGINS]
        ),
        log_level=(_get(env, "LOG_LEVEL") or "INFO").upper(),
        market_data_url=_get(env, "MARKET_DATA_URL") or DEFAULT_MARKET_DATA_URL,
        market_data_timeout=_env_float(env, "MARKET_DATA_TIMEOUT", 8.0),
        port=_env_int(env, "PORT", 3001),
    )


__all__ = [
    "DEFAULT_MARKET_DATA_URL",
    "DatabaseSettings",
    "Settings",
    "load_settings",
    "resolve_database_url",
]
