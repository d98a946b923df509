"""Core configuration and infrastructure helpers."""

from .cache import MISS, ResultCache, cache_key
from .config import (
    ALLOWED_CORS_ORIGINS,
    APP_VERSION,
    CATALOG_CACHE_TTL,
    DB_RESET,
    DEFAULT_BALLOON_NAME,
    EVENT_LOG_EPOCH,
    FIREFOX_EXTENSION_ORIGIN_REGEX,
    LEADERBOARD_CACHE_TTL,
    LEADERBOARD_DEFAULT_LIMIT,
    LEADERBOARD_MAX_LIMIT,
    SCORE_CACHE_TTL,
    STATISTICS_CACHE_TTL,
)
from .database import engine, get_session
from .time import utcnow

__all__ = [
    "ALLOWED_CORS_ORIGINS",
    "APP_VERSION",
    "CATALOG_CACHE_TTL",
    "DB_RESET",
    "DEFAULT_BALLOON_NAME",
    "EVENT_LOG_EPOCH",
    "FIREFOX_EXTENSION_ORIGIN_REGEX",
    "LEADERBOARD_CACHE_TTL",
    "LEADERBOARD_DEFAULT_LIMIT",
    "LEADERBOARD_MAX_LIMIT",
    "MISS",
    "ResultCache",
    "SCORE_CACHE_TTL",
    "STATISTICS_CACHE_TTL",
    "cache_key",
    "engine",
    "get_session",
    "utcnow",
]
