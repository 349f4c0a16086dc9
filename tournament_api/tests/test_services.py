"""
Tests for the service layer: cross-entity checks, error labels, and that
failed checks leave storage untouched.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timezone

import pytest

from tournament_api.errors import NotFoundError, RuleViolationError
from tournament_api.models import Match
from tournament_api.persistence import Database, SqliteMatchRepository
from tournament_api.services import MatchService, PlayerService, TeamService, TournamentService

BIRTH = datetime(1987, 6, 24, tzinfo=timezone.utc)
KICKOFF = datetime(2022, 12, 18, 15, tzinfo=timezone.utc)


class RecordingMatchRepository(SqliteMatchRepository):
    """Counts writes so tests can assert nothing reached storage."""

    def __init__(self) -> None:
        self.writes = 0

    def create(self, conn, match: Match) -> None:
        self.writes += 1
        super().create(conn, match)

    def update(self, conn, match: Match) -> None:
        self.writes += 1
        super().update(conn, match)


@pytest.fixture
def db_conn(tmp_path):
    database = Database(tmp_path / "service_test.db")
    database.open()
    with database.session() as conn:
        yield conn
    database.close()


@pytest.fixture
def match_repo():
    return RecordingMatchRepository()


@pytest.fixture
def match_service(match_repo):
    return MatchService(match_repo=match_repo)


# ---------- players ----------


def test_update_player_overwrites_fields(db_conn):
    svc = PlayerService()
    player = svc.create_player(db_conn, "Kun", BIRTH)
    updated = svc.update_player(db_conn, player.id, "Sergio Aguero", BIRTH)
    assert updated.id == player.id
    assert updated.created_at == player.created_at
    assert svc.get_player(db_conn, player.id).name == "Sergio Aguero"


def test_update_unknown_player_raises_not_found(db_conn):
    with pytest.raises(NotFoundError):
        PlayerService().update_player(db_conn, uuid.uuid4(), "Ghost", BIRTH)


# ---------- teams ----------


def test_add_player_to_unknown_team_labels_team(db_conn):
    player = PlayerService().create_player(db_conn, "Messi", BIRTH)
    with pytest.raises(NotFoundError, match=r"^team not found: "):
        TeamService().add_player_to_team(db_conn, uuid.uuid4(), player.id)


def test_add_unknown_player_labels_player(db_conn):
    team = TeamService().create_team(db_conn, "Argentina")
    with pytest.raises(NotFoundError, match=r"^player not found: "):
        TeamService().add_player_to_team(db_conn, team.id, uuid.uuid4())


def test_remove_non_member_is_silent(db_conn):
    svc = TeamService()
    team = svc.create_team(db_conn, "Argentina")
    svc.remove_player_from_team(db_conn, team.id, uuid.uuid4())
    assert svc.get_team_players(db_conn, team.id) == []


# ---------- tournaments ----------


def test_add_team_to_tournament_checks_both_sides(db_conn):
    svc = TournamentService()
    tour = svc.create_tournament(db_conn, "Qatar 2022")
    team = TeamService().create_team(db_conn, "Argentina")
    with pytest.raises(NotFoundError, match=r"^tournament not found: "):
        svc.add_team_to_tournament(db_conn, uuid.uuid4(), team.id)
    with pytest.raises(NotFoundError, match=r"^team not found: "):
        svc.add_team_to_tournament(db_conn, tour.id, uuid.uuid4())
    svc.add_team_to_tournament(db_conn, tour.id, team.id)
    assert [t.name for t in svc.get_tournament_teams(db_conn, tour.id)] == ["Argentina"]


# ---------- matches ----------


def test_create_match(db_conn, match_service):
    teams = TeamService()
    a = teams.create_team(db_conn, "Argentina")
    b = teams.create_team(db_conn, "Francia")
    match = match_service.create_match(db_conn, 64, KICKOFF, a.id, b.id, 3, 3)
    assert match_service.get_match(db_conn, match.id) == match
    assert [m.id for m in match_service.get_all_matches(db_conn)] == [match.id]


def test_missing_team1_reported_before_team2(db_conn, match_service, match_repo):
    with pytest.raises(RuleViolationError, match=r"^team1 not found: "):
        match_service.create_match(db_conn, 1, KICKOFF, uuid.uuid4(), uuid.uuid4())
    assert match_repo.writes == 0


def test_missing_team2(db_conn, match_service, match_repo):
    a = TeamService().create_team(db_conn, "Argentina")
    with pytest.raises(RuleViolationError, match=r"^team2 not found: "):
        match_service.create_match(db_conn, 1, KICKOFF, a.id, uuid.uuid4())
    assert match_repo.writes == 0


def test_self_match_writes_nothing(db_conn, match_service, match_repo):
    a = TeamService().create_team(db_conn, "Argentina")
    with pytest.raises(RuleViolationError, match="cannot play against itself"):
        match_service.create_match(db_conn, 1, KICKOFF, a.id, a.id)
    assert match_repo.writes == 0
    assert match_service.get_all_matches(db_conn) == []


def test_update_unknown_match_raises_not_found(db_conn, match_service):
    teams = TeamService()
    a = teams.create_team(db_conn, "Argentina")
    b = teams.create_team(db_conn, "Francia")
    with pytest.raises(NotFoundError):
        match_service.update_match(db_conn, uuid.uuid4(), 1, KICKOFF, a.id, b.id)


def test_update_match_rechecks_teams(db_conn, match_service, match_repo):
    teams = TeamService()
    a = teams.create_team(db_conn, "Argentina")
    b = teams.create_team(db_conn, "Francia")
    match = match_service.create_match(db_conn, 64, KICKOFF, a.id, b.id)
    with pytest.raises(RuleViolationError):
        match_service.update_match(db_conn, match.id, 64, KICKOFF, b.id, b.id)
    assert match_repo.writes == 1
    stored = match_service.get_match(db_conn, match.id)
    assert (stored.team1_id, stored.team2_id) == (a.id, b.id)

    updated = match_service.update_match(db_conn, match.id, 64, KICKOFF, a.id, b.id, 3, 3)
    assert updated.created_at == match.created_at
    assert match_service.get_match(db_conn, match.id).goal_scored_team1 == 3
