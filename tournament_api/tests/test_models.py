"""
Tests for domain models and RFC3339 time helpers.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from tournament_api.models import Match, Player, Team, Tournament, format_datetime, parse_datetime, to_db_datetime


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("1987-06-24T00:00:00Z", datetime(1987, 6, 24, tzinfo=timezone.utc)),
        ("1987-06-24T03:00:00+03:00", datetime(1987, 6, 24, tzinfo=timezone.utc)),
        ("2022-12-18T12:00:00-03:00", datetime(2022, 12, 18, 15, tzinfo=timezone.utc)),
        ("2022-12-18T15:00:00.250Z", datetime(2022, 12, 18, 15, 0, 0, 250000, tzinfo=timezone.utc)),
    ],
)
def test_parse_datetime_normalizes_to_utc(raw, expected):
    parsed = parse_datetime(raw)
    assert parsed == expected
    assert parsed.utcoffset() == timedelta(0)


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "1987-06-24",
        "1987-06-24T00:00:00",
        "24/06/1987",
        "not a date",
        "0001-01-01T00:00:00+01:00",
        "9999-12-31T23:00:00-02:00",
    ],
)
def test_parse_datetime_rejects(raw):
    with pytest.raises(ValueError):
        parse_datetime(raw)


def test_format_datetime_uses_z_suffix():
    dt = datetime(2022, 12, 18, 12, 0, tzinfo=timezone(timedelta(hours=-3)))
    assert format_datetime(dt) == "2022-12-18T15:00:00Z"


def test_db_datetime_is_fixed_width():
    a = to_db_datetime(datetime(2024, 1, 1, tzinfo=timezone.utc))
    b = to_db_datetime(datetime(2024, 1, 1, 0, 0, 0, 1, tzinfo=timezone.utc))
    assert len(a) == len(b)
    assert a < b


def test_new_stamps_id_and_created_at():
    before = datetime.now(timezone.utc)
    p1 = Player.new("Messi", datetime(1987, 6, 24, tzinfo=timezone.utc))
    p2 = Player.new("Messi", datetime(1987, 6, 24, tzinfo=timezone.utc))
    assert p1.id != p2.id
    assert p1.created_at >= before
    assert p1.created_at.tzinfo is not None


def test_team_to_dict_omits_unloaded_players():
    team = Team.new("Argentina")
    assert "players" not in team.to_dict()
    team.players = []
    assert "players" not in team.to_dict()
    team.players = [Player.new("Messi", datetime(1987, 6, 24, tzinfo=timezone.utc))]
    d = team.to_dict()
    assert d["players"][0]["name"] == "Messi"
    assert d["players"][0]["date_birth"] == "1987-06-24T00:00:00Z"


def test_tournament_to_dict_omits_unloaded_teams():
    tour = Tournament.new("Qatar 2022")
    assert set(tour.to_dict()) == {"id", "name", "created_at"}


def test_match_to_dict_shape():
    t1, t2 = Team.new("Argentina"), Team.new("Francia")
    match = Match.new(64, datetime(2022, 12, 18, 15, tzinfo=timezone.utc), t1.id, t2.id)
    d = match.to_dict()
    assert d["team1_id"] == str(t1.id)
    assert d["team2_id"] == str(t2.id)
    assert d["goal_scored_team1"] == 0
    assert d["goal_scored_team2"] == 0
    assert d["date"] == "2022-12-18T15:00:00Z"
