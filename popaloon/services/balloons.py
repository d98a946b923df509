"""Balloon type catalog lookups and administrative writes."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from sqlmodel import Session, select

from ..core.cache import ResultCache, cache_key
from ..core.config import CATALOG_CACHE_TTL
from ..core.errors import BalloonTypeNotFoundError, DuplicateBalloonTypeError
from ..models import BalloonType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BalloonInfo:
    id: int
    name: str
    value: int


def _to_info(balloon: BalloonType) -> BalloonInfo:
    return BalloonInfo(id=balloon.id, name=balloon.name, value=balloon.value or 1)


def _by_name_key(name: str):
    return cache_key("balloon-name", name)


def _by_id_key(balloon_id: int):
    return cache_key("balloon-id", balloon_id)


def _load_by_name(session: Session, name: str) -> BalloonInfo:
    balloon = session.exec(select(BalloonType).where(BalloonType.name == name)).first()
    if not balloon:
        raise BalloonTypeNotFoundError(name)
    return _to_info(balloon)


def _load_by_id(session: Session, balloon_id: int) -> BalloonInfo:
    balloon = session.get(BalloonType, balloon_id)
    if not balloon:
        raise BalloonTypeNotFoundError(balloon_id)
    return _to_info(balloon)


def resolve_by_name(session: Session, cache: ResultCache, name: str) -> BalloonInfo:
    """Translate a client-supplied balloon name into its catalog entry."""

    return cache.get_or_compute(
        _by_name_key(name), CATALOG_CACHE_TTL, lambda: _load_by_name(session, name)
    )


def resolve_by_id(session: Session, cache: ResultCache, balloon_id: int) -> BalloonInfo:
    return cache.get_or_compute(
        _by_id_key(balloon_id), CATALOG_CACHE_TTL, lambda: _load_by_id(session, balloon_id)
    )


def list_balloon_types(session: Session) -> List[BalloonInfo]:
    balloons = session.exec(select(BalloonType).order_by(BalloonType.id)).all()
    return [_to_info(balloon) for balloon in balloons]


def _remember(cache: ResultCache, info: BalloonInfo) -> None:
    cache.set(_by_name_key(info.name), info, CATALOG_CACHE_TTL)
    cache.set(_by_id_key(info.id), info, CATALOG_CACHE_TTL)


def create_balloon_type(
    session: Session, cache: ResultCache, name: str, value: int = 1
) -> BalloonInfo:
    name = (name or "").strip()
    if not name:
        raise ValueError("Balloon name is required")
    if value < 1:
        raise ValueError("Balloon value must be a positive integer")

    existing = session.exec(select(BalloonType).where(BalloonType.name == name)).first()
    if existing:
        raise DuplicateBalloonTypeError(name)

    balloon = BalloonType(name=name, value=value)
    session.add(balloon)
    session.commit()
    session.refresh(balloon)

    info = _to_info(balloon)
    _remember(cache, info)
    logger.info("Added balloon type %s (id=%s, value=%s)", info.name, info.id, info.value)
    return info


def update_balloon_value(
    session: Session, cache: ResultCache, name: str, value: int
) -> BalloonInfo:
    """Change the points a balloon type is worth and refresh its cache entries."""

    if value < 1:
        raise ValueError("Balloon value must be a positive integer")

    balloon = session.exec(select(BalloonType).where(BalloonType.name == name)).first()
    if not balloon:
        raise BalloonTypeNotFoundError(name)

    balloon.value = value
    session.add(balloon)
    session.commit()
    session.refresh(balloon)

    info = _to_info(balloon)
    _remember(cache, info)
    logger.info("Balloon type %s now worth %s", info.name, info.value)
    return info


__all__ = [
    "BalloonInfo",
    "create_balloon_type",
    "list_balloon_types",
    "resolve_by_id",
    "resolve_by_name",
    "update_balloon_value",
]
