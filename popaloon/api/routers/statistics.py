"""Pop statistics endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlmodel import Session

from ...core import ResultCache, get_session
from ...services import DateRange, get_user, pop_history, total_popped
from ..deps import get_cache, get_current_user_id, history_range_query

router = APIRouter(prefix="/api/statistics", tags=["statistics"])


@router.get("")
def read_statistics(
    _: str = Depends(get_current_user_id),
    session: Session = Depends(get_session),
    cache: ResultCache = Depends(get_cache),
) -> Dict[str, int]:
    return {"totalPopped": total_popped(session, cache)}


@router.get("/history")
def read_history(
    date_range: DateRange = Depends(history_range_query),
    viewer_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session),
    cache: ResultCache = Depends(get_cache),
) -> Dict[str, Any]:
    """Get the caller's pops inside the requested window, oldest first."""

    user = get_user(session, viewer_id)
    return {"history": pop_history(session, cache, user.id, date_range)}


__all__ = ["router"]
