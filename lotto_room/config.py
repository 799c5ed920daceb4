"""Environment-based configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from sqlalchemy.engine import URL

STORE_BACKENDS = ("sql", "memory")
DEFAULT_SQLITE_URL = "sqlite:///./lotto_room.db"


def resolve_database_url(environ: Mapping[str, str] | None = None) -> str:
    """Resolve the games database connection string.

    Priority:
      1) DATABASE_URL (explicit)
      2) Postgres URL assembled from PGHOST, PGUSER, PGDATABASE
         (plus optional PGPASSWORD, PGPORT, PGSSLMODE)
      3) Local sqlite file
    """

    env = os.environ if environ is None else environ

    explicit = env.get("DATABASE_URL")
    if explicit:
        return explicit

    host, user, database = env.get("PGHOST"), env.get("PGUSER"), env.get("PGDATABASE")
    if not (host and user and database):
        return DEFAULT_SQLITE_URL

    sslmode = env.get("PGSSLMODE", "prefer")
    url = URL.create(
        drivername="postgresql+psycopg2",
        username=user,
        password=env.get("PGPASSWORD"),
        host=host,
        port=_int_env("PGPORT", 5432, env),
        database=database,
        query={"sslmode": sslmode} if sslmode else {},
    )
    return url.render_as_string(hide_password=False)


def _int_env(name: str, default: int, environ: Mapping[str, str] | None = None) -> int:
    raw = (os.environ if environ is None else environ).get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _store_backend(environ: Mapping[str, str] | None = None) -> str:
    value = (os.environ if environ is None else environ).get("STORE_BACKEND", "sql").lower().strip()
    if value not in STORE_BACKENDS:
        raise ValueError(f"STORE_BACKEND must be one of {', '.join(STORE_BACKENDS)}, got {value!r}")
    return value


@dataclass(frozen=True)
class BaseConfig:
    """Base configuration shared by all environments."""

    APP_ENV: str = os.getenv("APP_ENV", "development")
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret")
    TESTING: bool = False

    STORE_BACKEND: str = _store_backend()
    DATABASE_URL: str = resolve_database_url()

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Game tuning
    HISTORY_LIMIT: int = _int_env("HISTORY_LIMIT", 100)
    DEFAULT_MAX_PLAYERS: int = _int_env("DEFAULT_MAX_PLAYERS", 10)


@dataclass(frozen=True)
class DevelopmentConfig(BaseConfig):
    DEBUG: bool = True


@dataclass(frozen=True)
class ProductionConfig(BaseConfig):
    DEBUG: bool = False


@dataclass(frozen=True)
class TestingConfig(BaseConfig):
    """In-memory store, no database file, quiet logs."""

    APP_ENV: str = "testing"
    TESTING: bool = True
    DEBUG: bool = False
    STORE_BACKEND: str = "memory"
    DATABASE_URL: str = "sqlite://"
    LOG_LEVEL: str = "WARNING"


_CONFIGS: dict[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}


def get_config() -> type[BaseConfig]:
    """Resolve configuration class based on APP_ENV; unknown names fall back to development."""

    env = os.getenv("APP_ENV", "development").lower().strip()
    return _CONFIGS.get(env, DevelopmentConfig)
