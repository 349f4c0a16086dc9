"""
SQLite schema for tournament entities.
Migration-friendly: each table created with IF NOT EXISTS.
Storage owns the integrity rules: FK cascades, unique team names,
composite keys on join tables and the team1 <> team2 check.
"""
from __future__ import annotations


def players_schema() -> str:
    return """
    CREATE TABLE IF NOT EXISTS players (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        date_birth TEXT NOT NULL,
        created_at TEXT NOT NULL
    );
    CREATE INDEX IF NOT EXISTS ix_players_name ON players(name);
    CREATE INDEX IF NOT EXISTS ix_players_date_birth ON players(date_birth);
    """


def teams_schema() -> str:
    return """
    CREATE TABLE IF NOT EXISTS teams (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL UNIQUE,
        created_at TEXT NOT NULL
    );
    """


def tournaments_schema() -> str:
    return """
    CREATE TABLE IF NOT EXISTS tournaments (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        created_at TEXT NOT NULL
    );
    """


def matches_schema() -> str:
    """Two many-to-one references to teams; deleting a team removes its matches."""
    return """
    CREATE TABLE IF NOT EXISTS matches (
        id TEXT PRIMARY KEY,
        match_number INTEGER NOT NULL,
        date TEXT NOT NULL,
        team1_id TEXT NOT NULL,
        team2_id TEXT NOT NULL,
        goal_scored_team1 INTEGER NOT NULL DEFAULT 0 CHECK (goal_scored_team1 >= 0),
        goal_scored_team2 INTEGER NOT NULL DEFAULT 0 CHECK (goal_scored_team2 >= 0),
        created_at TEXT NOT NULL,
        CONSTRAINT different_teams CHECK (team1_id <> team2_id),
        FOREIGN KEY (team1_id) REFERENCES teams(id) ON DELETE CASCADE,
        FOREIGN KEY (team2_id) REFERENCES teams(id) ON DELETE CASCADE
    );
    CREATE INDEX IF NOT EXISTS ix_matches_date ON matches(date);
    CREATE INDEX IF NOT EXISTS ix_matches_team1 ON matches(team1_id);
    CREATE INDEX IF NOT EXISTS ix_matches_team2 ON matches(team2_id);
    """


def team_players_schema() -> str:
    return """
    CREATE TABLE IF NOT EXISTS team_players (
        team_id TEXT NOT NULL,
        player_id TEXT NOT NULL,
        joined_at TEXT NOT NULL,
        PRIMARY KEY (team_id, player_id),
        FOREIGN KEY (team_id) REFERENCES teams(id) ON DELETE CASCADE,
        FOREIGN KEY (player_id) REFERENCES players(id) ON DELETE CASCADE
    );
    CREATE INDEX IF NOT EXISTS ix_team_players_team ON team_players(team_id);
    CREATE INDEX IF NOT EXISTS ix_team_players_player ON team_players(player_id);
    """


def tournament_teams_schema() -> str:
    return """
    CREATE TABLE IF NOT EXISTS tournament_teams (
        tournament_id TEXT NOT NULL,
        team_id TEXT NOT NULL,
        joined_at TEXT NOT NULL,
        PRIMARY KEY (tournament_id, team_id),
        FOREIGN KEY (tournament_id) REFERENCES tournaments(id) ON DELETE CASCADE,
        FOREIGN KEY (team_id) REFERENCES teams(id) ON DELETE CASCADE
    );
    CREATE INDEX IF NOT EXISTS ix_tournament_teams_tournament ON tournament_teams(tournament_id);
    CREATE INDEX IF NOT EXISTS ix_tournament_teams_team ON tournament_teams(team_id);
    """


def all_schema_sql() -> str:
    """Combine all schema DDL for a single execution. Referenced tables first."""
    return "\n".join([
        players_schema(),
        teams_schema(),
        tournaments_schema(),
        matches_schema(),
        team_players_schema(),
        tournament_teams_schema(),
    ])
