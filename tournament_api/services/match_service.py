"""
Match use cases.
Create and update verify, in order: team1 exists, team2 exists, team1 != team2.
Nothing is written unless all three hold.
"""
from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from uuid import UUID

from tournament_api.errors import NotFoundError, RuleViolationError
from tournament_api.models import Match
from tournament_api.persistence.interfaces import MatchRepository, TeamRepository
from tournament_api.persistence.repositories import SqliteMatchRepository, SqliteTeamRepository

logger = logging.getLogger(__name__)


class MatchService:
    def __init__(
        self,
        match_repo: MatchRepository | None = None,
        team_repo: TeamRepository | None = None,
    ) -> None:
        self._match_repo = match_repo or SqliteMatchRepository()
        self._team_repo = team_repo or SqliteTeamRepository()

    def _check_teams(self, conn: sqlite3.Connection, team1_id: UUID, team2_id: UUID) -> None:
        for label, team_id in (("team1", team1_id), ("team2", team2_id)):
            try:
                self._team_repo.get_by_id(conn, team_id)
            except NotFoundError as e:
                raise RuleViolationError(f"{label} not found: {e}") from e
        if team1_id == team2_id:
            raise RuleViolationError("a team cannot play against itself")

    def create_match(
        self,
        conn: sqlite3.Connection,
        match_number: int,
        date: datetime,
        team1_id: UUID,
        team2_id: UUID,
        goal_scored_team1: int = 0,
        goal_scored_team2: int = 0,
    ) -> Match:
        self._check_teams(conn, team1_id, team2_id)
        match = Match.new(match_number, date, team1_id, team2_id, goal_scored_team1, goal_scored_team2)
        self._match_repo.create(conn, match)
        logger.info("Created match %s (#%d: %s vs %s)", match.id, match_number, team1_id, team2_id)
        return match

    def get_match(self, conn: sqlite3.Connection, match_id: UUID) -> Match:
        return self._match_repo.get_by_id(conn, match_id)

    def get_all_matches(self, conn: sqlite3.Connection) -> list[Match]:
        return self._match_repo.get_all(conn)

    def update_match(
        self,
        conn: sqlite3.Connection,
        match_id: UUID,
        match_number: int,
        date: datetime,
        team1_id: UUID,
        team2_id: UUID,
        goal_scored_team1: int = 0,
        goal_scored_team2: int = 0,
    ) -> Match:
        """Full overwrite of mutable fields. Unknown match_id raises NotFoundError."""
        match = self._match_repo.get_by_id(conn, match_id)
        self._check_teams(conn, team1_id, team2_id)
        match.match_number = match_number
        match.date = date
        match.team1_id = team1_id
        match.team2_id = team2_id
        match.goal_scored_team1 = goal_scored_team1
        match.goal_scored_team2 = goal_scored_team2
        self._match_repo.update(conn, match)
        return match

    def delete_match(self, conn: sqlite3.Connection, match_id: UUID) -> None:
        self._match_repo.delete(conn, match_id)
        logger.info("Deleted match %s", match_id)
