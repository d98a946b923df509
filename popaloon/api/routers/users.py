"""User score endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from ...core import DEFAULT_BALLOON_NAME, ResultCache, get_session
from ...core.errors import PermissionDeniedError
from ...services import get_score, get_user, record_pop, user_to_dict
from ..deps import get_cache, get_current_user_id

router = APIRouter(prefix="/api/user", tags=["user"])


@router.get("/{user_id}")
def read_user(
    user_id: str,
    viewer_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session),
    cache: ResultCache = Depends(get_cache),
) -> Dict[str, Any]:
    """Get a user with their derived score."""

    user = get_user(session, user_id)
    return user_to_dict(user, get_score(session, cache, user.id), viewer_id)


@router.get("/{user_id}/count")
def read_count(
    user_id: str,
    _: str = Depends(get_current_user_id),
    session: Session = Depends(get_session),
    cache: ResultCache = Depends(get_cache),
) -> Dict[str, Any]:
    user = get_user(session, user_id)
    return {"id": user.id, "count": get_score(session, cache, user.id)}


@router.post("/{user_id}/count/increment")
def increment_count(
    user_id: str,
    balloon: str = Query(DEFAULT_BALLOON_NAME, alias="type"),
    viewer_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session),
    cache: ResultCache = Depends(get_cache),
) -> Dict[str, Any]:
    """Record one popped balloon for the authenticated user."""

    user = get_user(session, user_id)
    if user.id != viewer_id:
        raise PermissionDeniedError()

    count = record_pop(session, cache, user.id, balloon)
    return {"id": user.id, "count": count}


__all__ = ["router"]
