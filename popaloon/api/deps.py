"""Request dependencies shared by the routers."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from fastapi import Query, Request

from ..core.cache import ResultCache
from ..core.errors import AuthenticationError
from ..core.security import decode_access_token
from ..services.ranges import DateRange


def get_cache(request: Request) -> ResultCache:
    """Return the process-wide result cache created by the app factory."""

    return request.app.state.cache


def get_current_user_id(request: Request) -> str:
    """Authenticate the caller from the ``Authorization`` header.

    Both a bare token and ``Bearer <token>`` are accepted.
    """

    raw = (request.headers.get("authorization") or "").strip()
    if raw.lower().startswith("bearer "):
        raw = raw[7:].strip()
    if not raw:
        raise AuthenticationError()
    return decode_access_token(raw)


def date_range_query(
    start: Optional[datetime] = Query(None, alias="start-date"),
    end: Optional[datetime] = Query(None, alias="end-date"),
) -> DateRange:
    return DateRange.parse(start, end)


def history_range_query(
    start: Optional[datetime] = Query(None, alias="start-date"),
    end: Optional[datetime] = Query(None, alias="end-date"),
) -> DateRange:
    return DateRange.parse(start, end, require_start=True, end_defaults_to_now=True)


__all__ = [
    "date_range_query",
    "get_cache",
    "get_current_user_id",
    "history_range_query",
]
