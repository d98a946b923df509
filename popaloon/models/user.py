"""Database model for leaderboard users."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


def new_user_id() -> str:
    return uuid.uuid4().hex


class User(SQLModel, table=True):
    """Participant; users without a username are hidden from public rankings."""

    id: str = ORMField(default_factory=new_user_id, primary_key=True, max_length=32)
    username: Optional[str] = ORMField(default=None, index=True)
    email: Optional[str] = None
    created_at: datetime = ORMField(default_factory=utcnow)
    updated_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["User", "new_user_id"]
