"""Database model exports."""

from .balloon import BalloonType
from .count import LegacyCount
from .pop_event import (
    MAX_EVENT_INSTANT,
    PopEvent,
    event_created_at,
    event_id_ceiling,
    event_id_floor,
    new_event_id,
)
from .user import User, new_user_id

__all__ = [
    "BalloonType",
    "LegacyCount",
    "MAX_EVENT_INSTANT",
    "PopEvent",
    "User",
    "event_created_at",
    "event_id_ceiling",
    "event_id_floor",
    "new_event_id",
    "new_user_id",
]
