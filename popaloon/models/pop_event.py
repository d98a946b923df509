"""
Database model for the append-only pop event log.

Event ids are 24 hex digits: the creation second as 8 hex digits followed by
16 random ones. Ids of equal length sort in creation order, so the id alone
answers "when" and a date range becomes an id range.
"""

from __future__ import annotations

import secrets
from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field as ORMField, SQLModel

from ..core.time import as_utc, utcnow

_TIME_DIGITS = 8
_RANDOM_DIGITS = 16
EVENT_ID_LENGTH = _TIME_DIGITS + _RANDOM_DIGITS

# Last second an 8-digit prefix can encode (2106-02-07).
MAX_EVENT_SECONDS = 0xFFFFFFFF
MAX_EVENT_INSTANT = datetime.fromtimestamp(MAX_EVENT_SECONDS, tz=timezone.utc)


def _epoch_seconds(instant: datetime, round_up: bool = False) -> int:
    instant = as_utc(instant)
    seconds = int(instant.timestamp())
    if round_up and instant.microsecond:
        seconds += 1
    return seconds


def _seconds_prefix(seconds: int) -> str:
    seconds = min(max(seconds, 0), MAX_EVENT_SECONDS)
    return f"{seconds:0{_TIME_DIGITS}x}"


def new_event_id(at: Optional[datetime] = None) -> str:
    """Return a fresh id whose prefix encodes ``at`` (default: now)."""

    seconds = _epoch_seconds(at or utcnow())
    if seconds > MAX_EVENT_SECONDS:
        raise ValueError("Event time is beyond the id range")
    return _seconds_prefix(seconds) + secrets.token_hex(_RANDOM_DIGITS // 2)


def event_created_at(event_id: str) -> datetime:
    return datetime.fromtimestamp(int(event_id[:_TIME_DIGITS], 16), tz=timezone.utc)


def event_id_floor(instant: datetime) -> Optional[str]:
    """Smallest id whose encoded second is not before ``instant``.

    ``None`` when ``instant`` lies past the last encodable second, so no id
    can qualify.
    """

    seconds = _epoch_seconds(instant, round_up=True)
    if seconds > MAX_EVENT_SECONDS:
        return None
    return _seconds_prefix(seconds) + "0" * _RANDOM_DIGITS


def event_id_ceiling(instant: datetime) -> str:
    """Largest id that can be minted within the second of ``instant``."""

    return _seconds_prefix(_epoch_seconds(instant)) + "f" * _RANDOM_DIGITS


class PopEvent(SQLModel, table=True):
    """One scoring action. Never updated, never deleted."""

    __tablename__ = "pop_event"

    id: str = ORMField(
        default_factory=new_event_id, primary_key=True, max_length=EVENT_ID_LENGTH
    )
    user_id: str = ORMField(foreign_key="user.id", index=True, max_length=32)
    type_id: int = ORMField(foreign_key="balloon.id", index=True)

    @property
    def created_at(self) -> datetime:
        return event_created_at(self.id)


__all__ = [
    "EVENT_ID_LENGTH",
    "MAX_EVENT_INSTANT",
    "PopEvent",
    "event_created_at",
    "event_id_ceiling",
    "event_id_floor",
    "new_event_id",
]
