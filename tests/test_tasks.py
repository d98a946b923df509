"""Tests for administrative commands"""
import pytest

from popaloon.core.security import decode_access_token
from popaloon.services import list_balloon_types, resolve_by_name
from popaloon.tasks import build_parser, init_db, regenerate_token


def test_init_db_seeds_balloons_once(session, cache):
    assert init_db(session, cache) == ["default", "confetti"]
    assert init_db(session, cache) == []
    assert [b.name for b in list_balloon_types(session)] == ["default", "confetti"]
    assert resolve_by_name(session, cache, "default").value == 1


def test_regenerate_token_round_trips():
    user_id = "ab" * 16
    assert decode_access_token(regenerate_token(user_id)) == user_id


def test_parser_reads_balloon_value():
    args = build_parser().parse_args(["add-balloon", "confetti", "--value", "3"])
    assert (args.command, args.name, args.value) == ("add-balloon", "confetti", 3)


def test_parser_requires_a_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])
