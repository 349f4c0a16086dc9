"""
Persistence layer for tournament data.
No business logic, only read/write interfaces.
"""
from .db import Database
from .interfaces import (
    MatchRepository,
    PlayerRepository,
    TeamRepository,
    TournamentRepository,
)
from .repositories import (
    SqliteMatchRepository,
    SqlitePlayerRepository,
    SqliteTeamRepository,
    SqliteTournamentRepository,
)

__all__ = [
    "Database",
    "PlayerRepository",
    "TeamRepository",
    "TournamentRepository",
    "MatchRepository",
    "SqlitePlayerRepository",
    "SqliteTeamRepository",
    "SqliteTournamentRepository",
    "SqliteMatchRepository",
]
