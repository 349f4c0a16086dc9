"""
Tournament use cases: CRUD pass-through plus tournament↔team membership.
"""
from __future__ import annotations

import logging
import sqlite3
from uuid import UUID

from tournament_api.errors import NotFoundError
from tournament_api.models import Team, Tournament
from tournament_api.persistence.interfaces import TeamRepository, TournamentRepository
from tournament_api.persistence.repositories import SqliteTeamRepository, SqliteTournamentRepository

logger = logging.getLogger(__name__)


class TournamentService:
    def __init__(
        self,
        tournament_repo: TournamentRepository | None = None,
        team_repo: TeamRepository | None = None,
    ) -> None:
        self._tournament_repo = tournament_repo or SqliteTournamentRepository()
        self._team_repo = team_repo or SqliteTeamRepository()

    def create_tournament(self, conn: sqlite3.Connection, name: str) -> Tournament:
        tournament = Tournament.new(name)
        self._tournament_repo.create(conn, tournament)
        logger.info("Created tournament %s (%s)", tournament.id, tournament.name)
        return tournament

    def get_tournament(self, conn: sqlite3.Connection, tournament_id: UUID) -> Tournament:
        return self._tournament_repo.get_by_id(conn, tournament_id)

    def get_all_tournaments(self, conn: sqlite3.Connection) -> list[Tournament]:
        return self._tournament_repo.get_all(conn)

    def update_tournament(self, conn: sqlite3.Connection, tournament_id: UUID, name: str) -> Tournament:
        tournament = self._tournament_repo.get_by_id(conn, tournament_id)
        tournament.name = name
        self._tournament_repo.update(conn, tournament)
        return tournament

    def delete_tournament(self, conn: sqlite3.Connection, tournament_id: UUID) -> None:
        self._tournament_repo.delete(conn, tournament_id)
        logger.info("Deleted tournament %s", tournament_id)

    def add_team_to_tournament(self, conn: sqlite3.Connection, tournament_id: UUID, team_id: UUID) -> None:
        """Both sides must exist; each miss is labeled with its side."""
        try:
            self._tournament_repo.get_by_id(conn, tournament_id)
        except NotFoundError as e:
            raise NotFoundError(f"tournament not found: {e}") from e
        try:
            self._team_repo.get_by_id(conn, team_id)
        except NotFoundError as e:
            raise NotFoundError(f"team not found: {e}") from e
        self._tournament_repo.add_team(conn, tournament_id, team_id)
        logger.info("Added team %s to tournament %s", team_id, tournament_id)

    def remove_team_from_tournament(self, conn: sqlite3.Connection, tournament_id: UUID, team_id: UUID) -> None:
        self._tournament_repo.remove_team(conn, tournament_id, team_id)

    def get_tournament_teams(self, conn: sqlite3.Connection, tournament_id: UUID) -> list[Team]:
        return self._tournament_repo.get_tournament_teams(conn, tournament_id)
