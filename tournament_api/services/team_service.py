"""
Team use cases: CRUD pass-through plus team↔player membership.
Adding a player checks both sides exist first; the check and the insert are
separate statements, so a concurrent delete surfaces as a storage ConflictError.
"""
from __future__ import annotations

import logging
import sqlite3
from uuid import UUID

from tournament_api.errors import NotFoundError
from tournament_api.models import Player, Team
from tournament_api.persistence.interfaces import PlayerRepository, TeamRepository
from tournament_api.persistence.repositories import SqlitePlayerRepository, SqliteTeamRepository

logger = logging.getLogger(__name__)


class TeamService:
    def __init__(
        self,
        team_repo: TeamRepository | None = None,
        player_repo: PlayerRepository | None = None,
    ) -> None:
        self._team_repo = team_repo or SqliteTeamRepository()
        self._player_repo = player_repo or SqlitePlayerRepository()

    def create_team(self, conn: sqlite3.Connection, name: str) -> Team:
        team = Team.new(name)
        self._team_repo.create(conn, team)
        logger.info("Created team %s (%s)", team.id, team.name)
        return team

    def get_team(self, conn: sqlite3.Connection, team_id: UUID) -> Team:
        return self._team_repo.get_by_id(conn, team_id)

    def get_all_teams(self, conn: sqlite3.Connection) -> list[Team]:
        return self._team_repo.get_all(conn)

    def update_team(self, conn: sqlite3.Connection, team_id: UUID, name: str) -> Team:
        team = self._team_repo.get_by_id(conn, team_id)
        team.name = name
        self._team_repo.update(conn, team)
        return team

    def delete_team(self, conn: sqlite3.Connection, team_id: UUID) -> None:
        self._team_repo.delete(conn, team_id)
        logger.info("Deleted team %s", team_id)

    def add_player_to_team(self, conn: sqlite3.Connection, team_id: UUID, player_id: UUID) -> None:
        try:
            self._team_repo.get_by_id(conn, team_id)
        except NotFoundError as e:
            raise NotFoundError(f"team not found: {e}") from e
        try:
            self._player_repo.get_by_id(conn, player_id)
        except NotFoundError as e:
            raise NotFoundError(f"player not found: {e}") from e
        self._team_repo.add_player(conn, team_id, player_id)
        logger.info("Added player %s to team %s", player_id, team_id)

    def remove_player_from_team(self, conn: sqlite3.Connection, team_id: UUID, player_id: UUID) -> None:
        self._team_repo.remove_player(conn, team_id, player_id)

    def get_team_players(self, conn: sqlite3.Connection, team_id: UUID) -> list[Player]:
        return self._team_repo.get_team_players(conn, team_id)
