"""Database model for the per-user counter kept from before event logging."""

from __future__ import annotations

from datetime import datetime

from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class LegacyCount(SQLModel, table=True):
    """Snapshot of pops accrued before the event log existed. Read-only."""

    __tablename__ = "count"

    user_id: str = ORMField(foreign_key="user.id", primary_key=True, max_length=32)
    count: int = ORMField(default=0, ge=0)
    updated_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["LegacyCount"]
