"""
Derived score aggregation.

A user's score is the legacy snapshot count plus, for every balloon type they
popped, the number of pops times that type's value. Both parts are computed
inside one SQL statement so the event log is never walked row by row here:

    pops per (user, type)  --join-->  balloon.value  --sum-->  event score
    event score + legacy count (dropped when the window has a start bound)

Types missing from the catalog weigh 0. The legacy table is only ever read.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import literal
from sqlmodel import Session, col, func, select

from ..core.cache import ResultCache, cache_key
from ..core.config import DEFAULT_BALLOON_NAME, SCORE_CACHE_TTL
from ..core.errors import UserNotFoundError
from ..models import BalloonType, LegacyCount, PopEvent, User
from .balloons import resolve_by_name
from .ranges import UNBOUNDED, DateRange

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoreRow:
    user_id: str
    username: Optional[str]
    score: int


def _event_scores(date_range: DateRange, user_id: Optional[str] = None):
    """Subquery of ``(user_id, event_score)`` for users with events in range."""

    per_type = select(
        PopEvent.user_id,
        PopEvent.type_id,
        func.count().label("pops"),
    )
    conditions = date_range.event_filters()
    if user_id is not None:
        conditions.append(col(PopEvent.user_id) == user_id)
    if conditions:
        per_type = per_type.where(*conditions)
    per_type = per_type.group_by(PopEvent.user_id, PopEvent.type_id).subquery("pops_per_type")

    weighted = func.sum(per_type.c.pops * func.coalesce(BalloonType.value, 0))
    return (
        select(per_type.c.user_id, weighted.label("event_score"))
        .select_from(per_type)
        .outerjoin(BalloonType, col(BalloonType.id) == per_type.c.type_id)
        .group_by(per_type.c.user_id)
        .subquery("event_scores")
    )


def _scored_users(date_range: DateRange, user_id: Optional[str] = None):
    events = _event_scores(date_range, user_id)
    if date_range.includes_legacy:
        legacy = func.coalesce(LegacyCount.count, 0)
    else:
        legacy = literal(0)
    score = (legacy + func.coalesce(events.c.event_score, 0)).label("score")

    statement = (
        select(User.id, User.username, score)
        .select_from(User)
        .outerjoin(LegacyCount, col(LegacyCount.user_id) == col(User.id))
        .outerjoin(events, events.c.user_id == col(User.id))
    )
    return statement, score


def score_population(session: Session, date_range: DateRange = UNBOUNDED) -> List[ScoreRow]:
    """Scores of every user with a username, highest first.

    Equal scores come back ordered by user id so a fixed snapshot always pages
    the same way.
    """

    statement, score = _scored_users(date_range)
    statement = statement.where(col(User.username).is_not(None)).order_by(
        score.desc(), col(User.id)
    )
    rows = session.exec(statement).all()
    return [
        ScoreRow(user_id=row[0], username=row[1], score=int(row[2] or 0)) for row in rows
    ]


def compute_score(session: Session, user_id: str, date_range: DateRange = UNBOUNDED) -> int:
    """Derived score of one user, straight from the store."""

    statement, _ = _scored_users(date_range, user_id)
    row = session.exec(statement.where(col(User.id) == user_id)).first()
    if row is None:
        raise UserNotFoundError(user_id)
    return int(row[2] or 0)


def score_key(user_id: str, date_range: DateRange = UNBOUNDED):
    return cache_key("score", user_id, *date_range.cache_token())


def get_score(
    session: Session,
    cache: ResultCache,
    user_id: str,
    date_range: DateRange = UNBOUNDED,
) -> int:
    return cache.get_or_compute(
        score_key(user_id, date_range),
        SCORE_CACHE_TTL,
        lambda: compute_score(session, user_id, date_range),
    )


def record_pop(
    session: Session,
    cache: ResultCache,
    user_id: str,
    balloon_name: str = DEFAULT_BALLOON_NAME,
) -> int:
    """Append one pop event and return the user's refreshed total score."""

    if not session.get(User, user_id):
        raise UserNotFoundError(user_id)
    balloon = resolve_by_name(session, cache, balloon_name)

    event = PopEvent(user_id=user_id, type_id=balloon.id)
    session.add(event)
    session.commit()
    logger.info("Recorded %s pop %s for user %s", balloon.name, event.id, user_id)

    score = compute_score(session, user_id)
    cache.set(score_key(user_id), score, SCORE_CACHE_TTL)
    return score


__all__ = [
    "ScoreRow",
    "compute_score",
    "get_score",
    "record_pop",
    "score_key",
    "score_population",
]
