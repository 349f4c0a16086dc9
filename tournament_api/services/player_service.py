"""
Player use cases. Straight pass-through to the repository.
"""
from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from uuid import UUID

from tournament_api.models import Player
from tournament_api.persistence.interfaces import PlayerRepository
from tournament_api.persistence.repositories import SqlitePlayerRepository

logger = logging.getLogger(__name__)


class PlayerService:
    def __init__(self, player_repo: PlayerRepository | None = None) -> None:
        self._player_repo = player_repo or SqlitePlayerRepository()

    def create_player(self, conn: sqlite3.Connection, name: str, date_birth: datetime) -> Player:
        player = Player.new(name, date_birth)
        self._player_repo.create(conn, player)
        logger.info("Created player %s (%s)", player.id, player.name)
        return player

    def get_player(self, conn: sqlite3.Connection, player_id: UUID) -> Player:
        return self._player_repo.get_by_id(conn, player_id)

    def get_all_players(self, conn: sqlite3.Connection) -> list[Player]:
        return self._player_repo.get_all(conn)

    def update_player(self, conn: sqlite3.Connection, player_id: UUID, name: str, date_birth: datetime) -> Player:
        """Overwrite name and date_birth; id and created_at are kept."""
        player = self._player_repo.get_by_id(conn, player_id)
        player.name = name
        player.date_birth = date_birth
        self._player_repo.update(conn, player)
        return player

    def delete_player(self, conn: sqlite3.Connection, player_id: UUID) -> None:
        self._player_repo.delete(conn, player_id)
        logger.info("Deleted player %s", player_id)
