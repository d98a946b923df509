"""Helpers for user domain objects."""

from __future__ import annotations

import re
from typing import Any, Dict, Optional

from sqlmodel import Session

from ..core.errors import InvalidQueryError, UserNotFoundError
from ..core.time import isoformat_z
from ..models import User

_USER_ID_RE = re.compile(r"[0-9a-f]{32}")


def normalize_user_id(user_id: str) -> str:
    """Reject ids that could never have been minted."""

    normalized = (user_id or "").strip().lower()
    if not _USER_ID_RE.fullmatch(normalized):
        raise InvalidQueryError("Malformed user id")
    return normalized


def get_user(session: Session, user_id: str) -> User:
    user = session.get(User, normalize_user_id(user_id))
    if not user:
        raise UserNotFoundError(user_id)
    return user


def user_to_dict(user: User, count: int, viewer_id: Optional[str] = None) -> Dict[str, Any]:
    """Serialise a user with their score; the email is only shown to its owner."""

    return {
        "id": user.id,
        "username": user.username,
        "email": user.email if viewer_id is not None and viewer_id == user.id else None,
        "count": count,
        "updatedAt": isoformat_z(user.updated_at),
        "createdAt": isoformat_z(user.created_at),
    }


__all__ = ["get_user", "normalize_user_id", "user_to_dict"]
