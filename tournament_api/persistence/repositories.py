"""
SQLite implementations of the repository contracts.
No business logic, only read/write operations. All statements are parameterized.
"""
from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from typing import Iterator
from uuid import UUID

from tournament_api.errors import ConflictError, InternalError, NotFoundError
from tournament_api.models import (
    Match,
    Player,
    Team,
    Tournament,
    parse_datetime,
    to_db_datetime,
    utc_now,
)

from .interfaces import MatchRepository, PlayerRepository, TeamRepository, TournamentRepository

__all__ = [
    "SqlitePlayerRepository",
    "SqliteTeamRepository",
    "SqliteTournamentRepository",
    "SqliteMatchRepository",
]


@contextmanager
def _storage_errors(conn: sqlite3.Connection, conflict: str) -> Iterator[None]:
    """Translate sqlite3 failures into domain error kinds; roll back the failed write."""
    try:
        yield
    except sqlite3.IntegrityError as e:
        conn.rollback()
        raise ConflictError(f"{conflict} ({e})") from e
    except sqlite3.Error as e:
        conn.rollback()
        raise InternalError(str(e)) from e


def _execute_write(conn: sqlite3.Connection, sql: str, args: tuple, conflict: str) -> int:
    """Run one write statement, commit, return affected row count."""
    with _storage_errors(conn, conflict):
        cur = conn.execute(sql, args)
        conn.commit()
        return cur.rowcount


def _fetch_one(conn: sqlite3.Connection, sql: str, args: tuple) -> sqlite3.Row | None:
    with _storage_errors(conn, "read failed"):
        return conn.execute(sql, args).fetchone()


def _fetch_all(conn: sqlite3.Connection, sql: str, args: tuple = ()) -> list[sqlite3.Row]:
    with _storage_errors(conn, "read failed"):
        return conn.execute(sql, args).fetchall()


# ---------- Row mappers ----------


def _row_to_player(r: sqlite3.Row) -> Player:
    return Player(
        id=UUID(r["id"]),
        name=r["name"],
        date_birth=parse_datetime(r["date_birth"]),
        created_at=parse_datetime(r["created_at"]),
    )


def _row_to_team(r: sqlite3.Row) -> Team:
    return Team(id=UUID(r["id"]), name=r["name"], created_at=parse_datetime(r["created_at"]))


def _row_to_tournament(r: sqlite3.Row) -> Tournament:
    return Tournament(id=UUID(r["id"]), name=r["name"], created_at=parse_datetime(r["created_at"]))


def _row_to_match(r: sqlite3.Row) -> Match:
    return Match(
        id=UUID(r["id"]),
        match_number=r["match_number"],
        date=parse_datetime(r["date"]),
        team1_id=UUID(r["team1_id"]),
        team2_id=UUID(r["team2_id"]),
        goal_scored_team1=r["goal_scored_team1"],
        goal_scored_team2=r["goal_scored_team2"],
        created_at=parse_datetime(r["created_at"]),
    )


# ---------- PlayerRepository ----------


class SqlitePlayerRepository(PlayerRepository):
    """CRUD for players."""

    def create(self, conn: sqlite3.Connection, player: Player) -> None:
        _execute_write(
            conn,
            "INSERT INTO players (id, name, date_birth, created_at) VALUES (?, ?, ?, ?)",
            (str(player.id), player.name, to_db_datetime(player.date_birth), to_db_datetime(player.created_at)),
            conflict="could not create player",
        )

    def get_by_id(self, conn: sqlite3.Connection, player_id: UUID) -> Player:
        row = _fetch_one(
            conn,
            "SELECT id, name, date_birth, created_at FROM players WHERE id = ?",
            (str(player_id),),
        )
        if row is None:
            raise NotFoundError("player not found")
        return _row_to_player(row)

    def get_all(self, conn: sqlite3.Connection) -> list[Player]:
        rows = _fetch_all(
            conn,
            "SELECT id, name, date_birth, created_at FROM players ORDER BY created_at DESC, rowid DESC",
        )
        return [_row_to_player(r) for r in rows]

    def update(self, conn: sqlite3.Connection, player: Player) -> None:
        n = _execute_write(
            conn,
            "UPDATE players SET name = ?, date_birth = ? WHERE id = ?",
            (player.name, to_db_datetime(player.date_birth), str(player.id)),
            conflict="could not update player",
        )
        if n == 0:
            raise NotFoundError("player not found")

    def delete(self, conn: sqlite3.Connection, player_id: UUID) -> None:
        n = _execute_write(
            conn,
            "DELETE FROM players WHERE id = ?",
            (str(player_id),),
            conflict="could not delete player",
        )
        if n == 0:
            raise NotFoundError("player not found")


# ---------- TeamRepository ----------


class SqliteTeamRepository(TeamRepository):
    """CRUD for teams plus team↔player membership (team_players)."""

    def create(self, conn: sqlite3.Connection, team: Team) -> None:
        _execute_write(
            conn,
            "INSERT INTO teams (id, name, created_at) VALUES (?, ?, ?)",
            (str(team.id), team.name, to_db_datetime(team.created_at)),
            conflict=f"team name already exists: {team.name}",
        )

    def get_by_id(self, conn: sqlite3.Connection, team_id: UUID) -> Team:
        row = _fetch_one(conn, "SELECT id, name, created_at FROM teams WHERE id = ?", (str(team_id),))
        if row is None:
            raise NotFoundError("team not found")
        return _row_to_team(row)

    def get_all(self, conn: sqlite3.Connection) -> list[Team]:
        rows = _fetch_all(conn, "SELECT id, name, created_at FROM teams ORDER BY created_at DESC, rowid DESC")
        return [_row_to_team(r) for r in rows]

    def update(self, conn: sqlite3.Connection, team: Team) -> None:
        n = _execute_write(
            conn,
            "UPDATE teams SET name = ? WHERE id = ?",
            (team.name, str(team.id)),
            conflict=f"team name already exists: {team.name}",
        )
        if n == 0:
            raise NotFoundError("team not found")

    def delete(self, conn: sqlite3.Connection, team_id: UUID) -> None:
        # team_players, tournament_teams and matches rows go with it (ON DELETE CASCADE)
        n = _execute_write(conn, "DELETE FROM teams WHERE id = ?", (str(team_id),), conflict="could not delete team")
        if n == 0:
            raise NotFoundError("team not found")

    def add_player(self, conn: sqlite3.Connection, team_id: UUID, player_id: UUID) -> None:
        _execute_write(
            conn,
            "INSERT INTO team_players (team_id, player_id, joined_at) VALUES (?, ?, ?)",
            (str(team_id), str(player_id), to_db_datetime(utc_now())),
            conflict="player is already in this team",
        )

    def remove_player(self, conn: sqlite3.Connection, team_id: UUID, player_id: UUID) -> None:
        _execute_write(
            conn,
            "DELETE FROM team_players WHERE team_id = ? AND player_id = ?",
            (str(team_id), str(player_id)),
            conflict="could not remove player from team",
        )

    def get_team_players(self, conn: sqlite3.Connection, team_id: UUID) -> list[Player]:
        rows = _fetch_all(
            conn,
            """
            SELECT p.id, p.name, p.date_birth, p.created_at
            FROM players p
            INNER JOIN team_players tp ON p.id = tp.player_id
            WHERE tp.team_id = ?
            ORDER BY p.name
            """,
            (str(team_id),),
        )
        return [_row_to_player(r) for r in rows]


# ---------- TournamentRepository ----------


class SqliteTournamentRepository(TournamentRepository):
    """CRUD for tournaments plus tournament↔team membership (tournament_teams)."""

    def create(self, conn: sqlite3.Connection, tournament: Tournament) -> None:
        _execute_write(
            conn,
            "INSERT INTO tournaments (id, name, created_at) VALUES (?, ?, ?)",
            (str(tournament.id), tournament.name, to_db_datetime(tournament.created_at)),
            conflict="could not create tournament",
        )

    def get_by_id(self, conn: sqlite3.Connection, tournament_id: UUID) -> Tournament:
        row = _fetch_one(
            conn, "SELECT id, name, created_at FROM tournaments WHERE id = ?", (str(tournament_id),)
        )
        if row is None:
            raise NotFoundError("tournament not found")
        return _row_to_tournament(row)

    def get_all(self, conn: sqlite3.Connection) -> list[Tournament]:
        rows = _fetch_all(
            conn, "SELECT id, name, created_at FROM tournaments ORDER BY created_at DESC, rowid DESC"
        )
        return [_row_to_tournament(r) for r in rows]

    def update(self, conn: sqlite3.Connection, tournament: Tournament) -> None:
        n = _execute_write(
            conn,
            "UPDATE tournaments SET name = ? WHERE id = ?",
            (tournament.name, str(tournament.id)),
            conflict="could not update tournament",
        )
        if n == 0:
            raise NotFoundError("tournament not found")

    def delete(self, conn: sqlite3.Connection, tournament_id: UUID) -> None:
        n = _execute_write(
            conn, "DELETE FROM tournaments WHERE id = ?", (str(tournament_id),), conflict="could not delete tournament"
        )
        if n == 0:
            raise NotFoundError("tournament not found")

    def add_team(self, conn: sqlite3.Connection, tournament_id: UUID, team_id: UUID) -> None:
        _execute_write(
            conn,
            "INSERT INTO tournament_teams (tournament_id, team_id, joined_at) VALUES (?, ?, ?)",
            (str(tournament_id), str(team_id), to_db_datetime(utc_now())),
            conflict="team is already in this tournament",
        )

    def remove_team(self, conn: sqlite3.Connection, tournament_id: UUID, team_id: UUID) -> None:
        _execute_write(
            conn,
            "DELETE FROM tournament_teams WHERE tournament_id = ? AND team_id = ?",
            (str(tournament_id), str(team_id)),
            conflict="could not remove team from tournament",
        )

    def get_tournament_teams(self, conn: sqlite3.Connection, tournament_id: UUID) -> list[Team]:
        rows = _fetch_all(
            conn,
            """
            SELECT t.id, t.name, t.created_at
            FROM teams t
            INNER JOIN tournament_teams tt ON t.id = tt.team_id
            WHERE tt.tournament_id = ?
            ORDER BY t.name
            """,
            (str(tournament_id),),
        )
        return [_row_to_team(r) for r in rows]


# ---------- MatchRepository ----------

_MATCH_COLS = "id, match_number, date, team1_id, team2_id, goal_scored_team1, goal_scored_team2, created_at"


class SqliteMatchRepository(MatchRepository):
    """CRUD for matches. The different_teams CHECK and team FKs back up MatchService's checks."""

    def create(self, conn: sqlite3.Connection, match: Match) -> None:
        _execute_write(
            conn,
            f"INSERT INTO matches ({_MATCH_COLS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            (
                str(match.id),
                match.match_number,
                to_db_datetime(match.date),
                str(match.team1_id),
                str(match.team2_id),
                match.goal_scored_team1,
                match.goal_scored_team2,
                to_db_datetime(match.created_at),
            ),
            conflict="match rejected by storage constraints",
        )

    def get_by_id(self, conn: sqlite3.Connection, match_id: UUID) -> Match:
        row = _fetch_one(conn, f"SELECT {_MATCH_COLS} FROM matches WHERE id = ?", (str(match_id),))
        if row is None:
            raise NotFoundError("match not found")
        return _row_to_match(row)

    def get_all(self, conn: sqlite3.Connection) -> list[Match]:
        rows = _fetch_all(conn, f"SELECT {_MATCH_COLS} FROM matches ORDER BY created_at DESC, rowid DESC")
        return [_row_to_match(r) for r in rows]

    def update(self, conn: sqlite3.Connection, match: Match) -> None:
        n = _execute_write(
            conn,
            """
            UPDATE matches
            SET match_number = ?, date = ?, team1_id = ?, team2_id = ?,
                goal_scored_team1 = ?, goal_scored_team2 = ?
            WHERE id = ?
            """,
            (
                match.match_number,
                to_db_datetime(match.date),
                str(match.team1_id),
                str(match.team2_id),
                match.goal_scored_team1,
                match.goal_scored_team2,
                str(match.id),
            ),
            conflict="match rejected by storage constraints",
        )
        if n == 0:
            raise NotFoundError("match not found")

    def delete(self, conn: sqlite3.Connection, match_id: UUID) -> None:
        n = _execute_write(conn, "DELETE FROM matches WHERE id = ?", (str(match_id),), conflict="could not delete match")
        if n == 0:
            raise NotFoundError("match not found")
