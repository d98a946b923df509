"""Database model for the balloon type catalog."""

from __future__ import annotations

from typing import Optional

from sqlmodel import Field as ORMField, SQLModel


class BalloonType(SQLModel, table=True):
    """Kind of balloon and the points one pop of it is worth."""

    __tablename__ = "balloon"

    id: Optional[int] = ORMField(default=None, primary_key=True)
    name: str = ORMField(index=True, unique=True)
    value: int = ORMField(default=1, ge=1)


__all__ = ["BalloonType"]
