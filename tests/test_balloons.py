"""Tests for the balloon type catalog"""
import pytest

from popaloon.core.errors import BalloonTypeNotFoundError, DuplicateBalloonTypeError
from popaloon.models import BalloonType
from popaloon.services import (
    create_balloon_type,
    list_balloon_types,
    resolve_by_id,
    resolve_by_name,
    update_balloon_value,
)


def test_resolve_by_name_and_id(session, cache, balloons):
    confetti = resolve_by_name(session, cache, "confetti")
    assert confetti.value == 3
    assert resolve_by_id(session, cache, confetti.id) == confetti


def test_unknown_name_raises_not_found(session, cache, balloons):
    with pytest.raises(BalloonTypeNotFoundError) as excinfo:
        resolve_by_name(session, cache, "golden")
    assert excinfo.value.status_code == 404


def test_unknown_id_raises_not_found(session, cache, balloons):
    with pytest.raises(BalloonTypeNotFoundError):
        resolve_by_id(session, cache, 999)


def test_lookups_are_served_from_cache(session, cache, balloons):
    resolve_by_name(session, cache, "confetti")

    row = session.get(BalloonType, balloons["confetti"].id)
    session.delete(row)
    session.commit()

    assert resolve_by_name(session, cache, "confetti").value == 3


def test_cache_expires_after_an_hour(session, cache, clock, balloons):
    resolve_by_name(session, cache, "confetti")
    row = session.get(BalloonType, balloons["confetti"].id)
    session.delete(row)
    session.commit()

    clock.advance(3601)
    with pytest.raises(BalloonTypeNotFoundError):
        resolve_by_name(session, cache, "confetti")


def test_update_value_refreshes_cached_entries(session, cache, balloons):
    confetti = resolve_by_name(session, cache, "confetti")

    update_balloon_value(session, cache, "confetti", 5)

    assert resolve_by_name(session, cache, "confetti").value == 5
    assert resolve_by_id(session, cache, confetti.id).value == 5


def test_names_are_unique(session, cache, balloons):
    with pytest.raises(DuplicateBalloonTypeError):
        create_balloon_type(session, cache, "default")


def test_value_defaults_to_one(session, cache):
    assert create_balloon_type(session, cache, "plain").value == 1


def test_rejects_non_positive_values(session, cache):
    with pytest.raises(ValueError):
        create_balloon_type(session, cache, "free", 0)


def test_list_balloon_types(session, balloons):
    assert [b.name for b in list_balloon_types(session)] == ["default", "confetti"]
