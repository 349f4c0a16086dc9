"""
Service layer: one use-case class per entity.
Cross-entity existence checks live here; persistence is delegated to repositories.
"""
from .match_service import MatchService
from .player_service import PlayerService
from .team_service import TeamService
from .tournament_service import TournamentService

__all__ = [
    "PlayerService",
    "TeamService",
    "TournamentService",
    "MatchService",
]
