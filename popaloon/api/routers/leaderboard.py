"""Leaderboard endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from ...core import LEADERBOARD_DEFAULT_LIMIT, ResultCache, get_session
from ...services import (
    DateRange,
    get_leaderboard_page,
    get_score,
    get_user,
    get_user_rank,
    user_to_dict,
)
from ..deps import date_range_query, get_cache, get_current_user_id

router = APIRouter(prefix="/api/leaderboard", tags=["leaderboard"])


@router.get("")
def get_leaderboard(
    limit: int = Query(LEADERBOARD_DEFAULT_LIMIT),
    skip: int = Query(0),
    date_range: DateRange = Depends(date_range_query),
    viewer_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session),
    cache: ResultCache = Depends(get_cache),
) -> Dict[str, Any]:
    """Get a page of top users plus the caller's own standing."""

    entries = get_leaderboard_page(session, cache, limit, skip, date_range)
    user = get_user(session, viewer_id)
    count = get_score(session, cache, user.id, date_range)

    return {
        "user": user_to_dict(user, count, viewer_id),
        "rank": get_user_rank(session, cache, user.id, date_range),
        "topUsers": [
            {
                "user": {"id": entry.user_id, "username": entry.username},
                "count": entry.score,
                "rank": entry.rank,
            }
            for entry in entries
        ],
    }


@router.get("/rank")
def get_rank(
    date_range: DateRange = Depends(date_range_query),
    viewer_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session),
    cache: ResultCache = Depends(get_cache),
) -> Dict[str, Any]:
    user = get_user(session, viewer_id)
    return {"rank": get_user_rank(session, cache, user.id, date_range)}


__all__ = ["router"]
