"""Service layer helpers."""

from .balloons import (
    BalloonInfo,
    create_balloon_type,
    list_balloon_types,
    resolve_by_id,
    resolve_by_name,
    update_balloon_value,
)
from .ranges import UNBOUNDED, DateRange
from .ranking import (
    RankedEntry,
    dense_rank,
    get_leaderboard_page,
    get_user_rank,
    ranked_population,
)
from .scoring import ScoreRow, compute_score, get_score, record_pop, score_population
from .statistics import pop_history, total_popped
from .users import get_user, normalize_user_id, user_to_dict

__all__ = [
    "BalloonInfo",
    "DateRange",
    "RankedEntry",
    "ScoreRow",
    "UNBOUNDED",
    "compute_score",
    "create_balloon_type",
    "dense_rank",
    "get_leaderboard_page",
    "get_score",
    "get_user",
    "get_user_rank",
    "list_balloon_types",
    "normalize_user_id",
    "pop_history",
    "ranked_population",
    "record_pop",
    "resolve_by_id",
    "resolve_by_name",
    "score_population",
    "total_popped",
    "update_balloon_value",
    "user_to_dict",
]
