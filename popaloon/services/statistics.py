"""Global pop totals and per-user pop history."""

from __future__ import annotations

from typing import Any, Dict, List

from sqlmodel import Session, col, func, select

from ..core.cache import ResultCache, cache_key
from ..core.config import STATISTICS_CACHE_TTL
from ..core.errors import BalloonTypeNotFoundError
from ..core.time import isoformat_z
from ..models import LegacyCount, PopEvent, event_created_at
from .balloons import resolve_by_id
from .ranges import DateRange


def _count_total_popped(session: Session) -> int:
    legacy = session.exec(select(func.coalesce(func.sum(LegacyCount.count), 0))).one()
    events = session.exec(select(func.count()).select_from(PopEvent)).one()
    return int(legacy) + int(events)


def total_popped(session: Session, cache: ResultCache) -> int:
    """Every balloon ever popped: legacy snapshots plus logged events, unweighted."""

    return cache.get_or_compute(
        cache_key("total-popped"),
        STATISTICS_CACHE_TTL,
        lambda: _count_total_popped(session),
    )


def pop_history(
    session: Session, cache: ResultCache, user_id: str, date_range: DateRange
) -> List[Dict[str, Any]]:
    statement = select(PopEvent).where(col(PopEvent.user_id) == user_id)
    conditions = date_range.event_filters()
    if conditions:
        statement = statement.where(*conditions)
    events = session.exec(statement.order_by(col(PopEvent.id))).all()

    names: Dict[int, Any] = {}
    history: List[Dict[str, Any]] = []
    for event in events:
        if event.type_id not in names:
            try:
                names[event.type_id] = resolve_by_id(session, cache, event.type_id).name
            except BalloonTypeNotFoundError:
                # retired type
                names[event.type_id] = None
        history.append(
            {"date": isoformat_z(event_created_at(event.id)), "type": names[event.type_id]}
        )
    return history


__all__ = ["pop_history", "total_popped"]
