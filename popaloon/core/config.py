"""Application settings and environment helpers."""

from __future__ import annotations

import os
from datetime import datetime, timezone
from typing import Iterable, List

from dotenv import load_dotenv

load_dotenv(override=False)


def _require_env(name: str) -> str:
    """Return a required environment variable or raise an error."""

    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing required environment variable: {name}")
    return value


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc


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


# Token signing --------------------------------------------------------------
JWT_SECRET = _require_env("JWT_SECRET")
JWT_ALGORITHM = "HS256"
# 0 issues tokens without an expiry claim.
JWT_EXPIRATION = _env_int("JWT_EXPIRATION", 0)


# Storage --------------------------------------------------------------------
DATABASE_URL = os.getenv("DATABASE_URL", "")
DB_RESET = _env_bool("DB_RESET", False)


# Browser extension origins --------------------------------------------------
EXTENSION_ORIGIN = os.getenv(
    "EXTENSION_ORIGIN", "chrome-extension://pahcoancbdjmffpmfbnjablnabomdocp"
)
FIREFOX_EXTENSION_ORIGIN_REGEX = r"moz-extension://.*"

ALLOWED_CORS_ORIGINS = _unique(
    [EXTENSION_ORIGIN, *_split_csv(os.getenv("ALLOWED_ORIGINS"))]
)


# Runtime behaviour ----------------------------------------------------------
APP_VERSION = os.getenv("APP_VERSION", "1.0.0")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CACHE_MAX_ENTRIES = _env_int("CACHE_MAX_ENTRIES", 65536)
CATALOG_CACHE_TTL = _env_int("CATALOG_CACHE_TTL", 60 * 60)
LEADERBOARD_CACHE_TTL = _env_int("LEADERBOARD_CACHE_TTL", 60)
SCORE_CACHE_TTL = _env_int("SCORE_CACHE_TTL", 60)
STATISTICS_CACHE_TTL = _env_int("STATISTICS_CACHE_TTL", 5 * 60)


# Scoring rules --------------------------------------------------------------
EVENT_LOG_EPOCH = datetime(2024, 7, 1, tzinfo=timezone.utc)
LEADERBOARD_DEFAULT_LIMIT = 10
LEADERBOARD_MAX_LIMIT = 100
DEFAULT_BALLOON_NAME = "default"


__all__ = [
    "ALLOWED_CORS_ORIGINS",
    "APP_VERSION",
    "CACHE_MAX_ENTRIES",
    "CATALOG_CACHE_TTL",
    "DATABASE_URL",
    "DB_RESET",
    "DEFAULT_BALLOON_NAME",
    "EVENT_LOG_EPOCH",
    "EXTENSION_ORIGIN",
    "FIREFOX_EXTENSION_ORIGIN_REGEX",
    "JWT_ALGORITHM",
    "JWT_EXPIRATION",
    "JWT_SECRET",
    "LEADERBOARD_CACHE_TTL",
    "LEADERBOARD_DEFAULT_LIMIT",
    "LEADERBOARD_MAX_LIMIT",
    "LOG_LEVEL",
    "SCORE_CACHE_TTL",
    "STATISTICS_CACHE_TTL",
]
