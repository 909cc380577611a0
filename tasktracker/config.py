"""Settings loaded from environment variables (+ optional .env)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from urllib.parse import quote_plus

from dotenv import load_dotenv

load_dotenv(override=False)

DEFAULT_SQLITE_URL = "sqlite:///tasks.db"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v.strip()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [p.strip() for p in raw.replace(",", " ").split() if p.strip()]


def _strip_outer_quotes(s: str) -> str:
    if s and s[0] == s[-1] and s[0] in ("'", '"', "`"):
        return s[1:-1].strip()
    return s


def mask_url(url: str) -> str:
    """Hide the password part of a database URL for logging."""
    if "://" not in url:
        return url
    scheme, rest = url.split("://", 1)
    if "@" in rest and ":" in rest.split("@", 1)[0]:
        creds, tail = rest.split("@", 1)
        user = creds.split(":", 1)[0]
        return f"{scheme}://{user}:***@{tail}"
    return url


def build_database_url(
    *,
    url: str = "",
    driver: str = "postgresql+psycopg2",
    host: str = "",
    port: str = "",
    user: str = "",
    password: str = "",
    name: str = "",
) -> str:
    """
    Resolve the store URL.

    Order:
    1) an explicit URL (postgres:// is rewritten for SQLAlchemy)
    2) DB_* coordinates when a host is given
    3) a local SQLite file
    """
    url = _strip_outer_quotes(url)
    if url:
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql+psycopg2://", 1)
        return url

    if not host:
        return DEFAULT_SQLITE_URL

    if not name:
        raise ValueError("DB_HOST is set but DB_NAME is missing")

    creds = quote_plus(user) if user else ""
    if password:
        creds = f"{creds}:{quote_plus(password)}"
    netloc = f"{creds}@{host}" if creds else host
    if port:
        netloc = f"{netloc}:{port}"
    return f"{driver}://{netloc}/{name}"


@dataclass(frozen=True, slots=True)
class Settings:
    app_name: str
    log_level: str

    host: str
    port: int
    reload: bool
    cors_origins: list[str]

    database_url: str
    db_retry_delay: float

    @staticmethod
    def from_env() -> "Settings":
        database_url = build_database_url(
            url=_env("DATABASE_URL"),
            driver=_env("DB_DRIVER", "postgresql+psycopg2"),
            host=_env("DB_HOST"),
            port=_env("DB_PORT"),
            user=_env("DB_USER"),
            password=os.getenv("DB_PASSWORD", ""),
            name=_env("DB_NAME"),
        )
        return Settings(
            app_name=_env("APP_NAME", "Task Tracker"),
            log_level=_env("LOG_LEVEL", "INFO").upper(),
            host=_env("API_HOST", "0.0.0.0"),
            port=_env_int("API_PORT", 8000),
            reload=_env_bool("APP_RELOAD", False),
            cors_origins=_env_list("CORS_ORIGINS", ["*"]),
            database_url=database_url,
            db_retry_delay=max(0.0, _env_float("DB_RETRY_DELAY", 5.0)),
        )
