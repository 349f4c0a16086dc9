"""
Repository contracts.

Each entity's storage access is declared here as a typing.Protocol; the SQLite
implementations in ``repositories`` name the protocol they implement. Services
depend on these contracts only, so tests can hand them in-memory doubles.

Every method takes the request's connection as first argument. Lookups raise
NotFoundError instead of returning None; update/delete raise NotFoundError
when no row was affected.
"""
from __future__ import annotations

import sqlite3
from typing import Protocol, runtime_checkable
from uuid import UUID

from tournament_api.models import Match, Player, Team, Tournament

__all__ = [
    "PlayerRepository",
    "TeamRepository",
    "TournamentRepository",
    "MatchRepository",
]


@runtime_checkable
class PlayerRepository(Protocol):
    def create(self, conn: sqlite3.Connection, player: Player) -> None: ...

    def get_by_id(self, conn: sqlite3.Connection, player_id: UUID) -> Player: ...

    def get_all(self, conn: sqlite3.Connection) -> list[Player]: ...

    def update(self, conn: sqlite3.Connection, player: Player) -> None: ...

    def delete(self, conn: sqlite3.Connection, player_id: UUID) -> None: ...


@runtime_checkable
class TeamRepository(Protocol):
    def create(self, conn: sqlite3.Connection, team: Team) -> None: ...

    def get_by_id(self, conn: sqlite3.Connection, team_id: UUID) -> Team: ...

    def get_all(self, conn: sqlite3.Connection) -> list[Team]: ...

    def update(self, conn: sqlite3.Connection, team: Team) -> None: ...

    def delete(self, conn: sqlite3.Connection, team_id: UUID) -> None: ...

    def add_player(self, conn: sqlite3.Connection, team_id: UUID, player_id: UUID) -> None: ...

    def remove_player(self, conn: sqlite3.Connection, team_id: UUID, player_id: UUID) -> None: ...

    def get_team_players(self, conn: sqlite3.Connection, team_id: UUID) -> list[Player]: ...


@runtime_checkable
class TournamentRepository(Protocol):
    def create(self, conn: sqlite3.Connection, tournament: Tournament) -> None: ...

    def get_by_id(self, conn: sqlite3.Connection, tournament_id: UUID) -> Tournament: ...

    def get_all(self, conn: sqlite3.Connection) -> list[Tournament]: ...

    def update(self, conn: sqlite3.Connection, tournament: Tournament) -> None: ...

    def delete(self, conn: sqlite3.Connection, tournament_id: UUID) -> None: ...

    def add_team(self, conn: sqlite3.Connection, tournament_id: UUID, team_id: UUID) -> None: ...

    def remove_team(self, conn: sqlite3.Connection, tournament_id: UUID, team_id: UUID) -> None: ...

    def get_tournament_teams(self, conn: sqlite3.Connection, tournament_id: UUID) -> list[Team]: ...


@runtime_checkable
class MatchRepository(Protocol):
    def create(self, conn: sqlite3.Connection, match: Match) -> None: ...

    def get_by_id(self, conn: sqlite3.Connection, match_id: UUID) -> Match: ...

    def get_all(self, conn: sqlite3.Connection) -> list[Match]: ...

    def update(self, conn: sqlite3.Connection, match: Match) -> None: ...

    def delete(self, conn: sqlite3.Connection, match_id: UUID) -> None: ...
