"""Tests for time-ordered pop event ids"""
from datetime import datetime, timedelta, timezone

import pytest

from popaloon.models import (
    MAX_EVENT_INSTANT,
    event_created_at,
    event_id_ceiling,
    event_id_floor,
    new_event_id,
)
from popaloon.models.pop_event import EVENT_ID_LENGTH


def test_id_encodes_creation_second():
    at = datetime(2024, 8, 15, 12, 30, 45, 999000, tzinfo=timezone.utc)
    event_id = new_event_id(at)

    assert len(event_id) == EVENT_ID_LENGTH
    assert event_created_at(event_id) == at.replace(microsecond=0)


def test_ids_sort_by_creation_time():
    base = datetime(2024, 8, 15, tzinfo=timezone.utc)
    earlier = new_event_id(base)
    later = new_event_id(base + timedelta(seconds=1))
    assert earlier < later


def test_floor_and_ceiling_bracket_the_second():
    at = datetime(2024, 8, 15, 8, 0, 0, tzinfo=timezone.utc)
    event_id = new_event_id(at)

    assert event_id_floor(at) <= event_id <= event_id_ceiling(at)
    assert event_id < event_id_floor(at + timedelta(seconds=1))
    assert event_id > event_id_ceiling(at - timedelta(seconds=1))


def test_naive_instants_are_utc():
    naive = datetime(2024, 8, 15, 8, 0, 0)
    aware = naive.replace(tzinfo=timezone.utc)
    assert event_id_floor(naive) == event_id_floor(aware)


def test_fractional_floor_rounds_up():
    whole = datetime(2024, 8, 15, 12, 0, 0, tzinfo=timezone.utc)
    event_id = new_event_id(whole)

    assert event_id < event_id_floor(whole + timedelta(milliseconds=500))
    assert event_id_floor(whole + timedelta(milliseconds=500)) == event_id_floor(
        whole + timedelta(seconds=1)
    )


def test_bounds_past_the_id_range():
    assert event_id_floor(MAX_EVENT_INSTANT + timedelta(seconds=1)) is None
    assert event_id_floor(datetime(2200, 1, 1, tzinfo=timezone.utc)) is None
    assert event_id_ceiling(datetime(2200, 1, 1, tzinfo=timezone.utc)) == "f" * EVENT_ID_LENGTH


def test_minting_past_the_id_range_fails():
    with pytest.raises(ValueError):
        new_event_id(datetime(2200, 1, 1, tzinfo=timezone.utc))
