"""Date windows applied to the pop event log."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Optional, Tuple

from sqlalchemy import false
from sqlmodel import col

from ..core.cache import optional_token
from ..core.config import EVENT_LOG_EPOCH
from ..core.errors import InvalidQueryError
from ..core.time import as_utc, utcnow
from ..models import MAX_EVENT_INSTANT, PopEvent, event_id_ceiling, event_id_floor

_PREFIX = 8


@dataclass(frozen=True)
class DateRange:
    """Inclusive ``[start, end]`` window; ``None`` leaves a side open.

    Legacy counts cannot be attributed to a slice of time, so any window with
    a lower bound scores from events alone.
    """

    start: Optional[datetime] = None
    end: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.start is not None:
            object.__setattr__(self, "start", as_utc(self.start))
        if self.end is not None:
            object.__setattr__(self, "end", as_utc(self.end))

    @classmethod
    def parse(
        cls,
        start: Optional[datetime],
        end: Optional[datetime],
        *,
        require_start: bool = False,
        end_defaults_to_now: bool = False,
    ) -> "DateRange":
        if start is None and require_start:
            raise InvalidQueryError("start-date is required")
        if end is None and end_defaults_to_now:
            end = utcnow()

        window = cls(start, end)
        for bound in (window.start, window.end):
            if bound is not None and bound > MAX_EVENT_INSTANT:
                raise InvalidQueryError(
                    f"Dates must not be after {MAX_EVENT_INSTANT.date().isoformat()}"
                )
        if window.start is not None:
            if window.start < EVENT_LOG_EPOCH:
                raise InvalidQueryError(
                    f"Start date must be after {EVENT_LOG_EPOCH.date().isoformat()}"
                )
            if window.end is not None and window.start > window.end:
                raise InvalidQueryError("Start date must be before end date")
        return window

    @property
    def includes_legacy(self) -> bool:
        return self.start is None

    def cache_token(self) -> Tuple[str, str]:
        """Key parts built from the id bounds the query filters on.

        Windows that differ only inside one second select the same events and
        share a token.
        """

        start: Optional[str] = None
        if self.start is not None:
            floor = event_id_floor(self.start)
            start = floor[:_PREFIX] if floor is not None else "after-log"
        end = event_id_ceiling(self.end)[:_PREFIX] if self.end is not None else None
        return optional_token(start), optional_token(end)

    def event_filters(self) -> List[Any]:
        """SQL conditions on ``PopEvent.id`` selecting events inside the window."""

        conditions: List[Any] = []
        if self.start is not None:
            floor = event_id_floor(self.start)
            if floor is None:
                conditions.append(false())
            else:
                conditions.append(col(PopEvent.id) >= floor)
        if self.end is not None:
            conditions.append(col(PopEvent.id) <= event_id_ceiling(self.end))
        return conditions


UNBOUNDED = DateRange()


__all__ = ["DateRange", "UNBOUNDED"]
