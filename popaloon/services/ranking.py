"""Dense ranking over derived scores, with cached pages and user ranks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from sqlmodel import Session

from ..core.cache import ResultCache, cache_key
from ..core.config import LEADERBOARD_CACHE_TTL, LEADERBOARD_MAX_LIMIT
from ..core.errors import InvalidQueryError
from .ranges import UNBOUNDED, DateRange
from .scoring import ScoreRow, score_population


@dataclass(frozen=True)
class RankedEntry:
    user_id: str
    username: Optional[str]
    score: int
    rank: int


def dense_rank(rows: Iterable[ScoreRow]) -> List[RankedEntry]:
    """Rank rows by score, descending; ties share a rank and the next score gets rank + 1.

    The sort is stable, so tied rows keep the order they arrived in.
    """

    ranked: List[RankedEntry] = []
    rank = 0
    previous: Optional[int] = None
    for row in sorted(rows, key=lambda r: r.score, reverse=True):
        if row.score != previous:
            rank += 1
            previous = row.score
        ranked.append(RankedEntry(row.user_id, row.username, row.score, rank))
    return ranked


def validate_page(limit: int, skip: int) -> None:
    if limit < 1 or limit > LEADERBOARD_MAX_LIMIT:
        raise InvalidQueryError(
            f"Invalid limit, limit must be between 1 and {LEADERBOARD_MAX_LIMIT}"
        )
    if skip < 0:
        raise InvalidQueryError("Invalid skip, skip must be >= 0")


def ranked_population(
    session: Session, cache: ResultCache, date_range: DateRange = UNBOUNDED
) -> Tuple[RankedEntry, ...]:
    return cache.get_or_compute(
        cache_key("ranking", *date_range.cache_token()),
        LEADERBOARD_CACHE_TTL,
        lambda: tuple(dense_rank(score_population(session, date_range))),
    )


def get_leaderboard_page(
    session: Session,
    cache: ResultCache,
    limit: int,
    skip: int = 0,
    date_range: DateRange = UNBOUNDED,
) -> List[RankedEntry]:
    validate_page(limit, skip)
    page = cache.get_or_compute(
        cache_key("leaderboard", limit, skip, *date_range.cache_token()),
        LEADERBOARD_CACHE_TTL,
        lambda: ranked_population(session, cache, date_range)[skip : skip + limit],
    )
    return list(page)


def get_user_rank(
    session: Session,
    cache: ResultCache,
    user_id: str,
    date_range: DateRange = UNBOUNDED,
) -> Optional[int]:
    """Dense rank of ``user_id``, or ``None`` when they are not publicly ranked."""

    def _locate() -> Optional[int]:
        for entry in ranked_population(session, cache, date_range):
            if entry.user_id == user_id:
                return entry.rank
        return None

    return cache.get_or_compute(
        cache_key("rank", user_id, *date_range.cache_token()),
        LEADERBOARD_CACHE_TTL,
        _locate,
    )


__all__ = [
    "RankedEntry",
    "dense_rank",
    "get_leaderboard_page",
    "get_user_rank",
    "ranked_population",
    "validate_page",
]
