"""
REST API for the football tournament backend.
Thin wrappers around the services; every error body is {"error": message}.

Routes (under /api):
    /players, /teams, /tournaments, /matches          GET list, POST create
    /<resource>/{id}                                   GET, PUT, DELETE
    /teams/{id}/players                                GET members
    /teams/{id}/players/{player_id}                    POST attach, DELETE detach
    /tournaments/{id}/teams                            GET members
    /tournaments/{id}/teams/{team_id}                  POST attach, DELETE detach
Unsupported methods get 405, malformed ids or bodies get 400 before any service runs.
"""
from __future__ import annotations

import logging
import sqlite3
from contextlib import asynccontextmanager, contextmanager
from typing import Any, AsyncGenerator, Generator, Iterator
from uuid import UUID

from fastapi import APIRouter, Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from tournament_api.config import Settings
from tournament_api.errors import ErrorKind, RuleViolationError, TournamentError
from tournament_api.persistence import Database
from tournament_api.schemas import MatchIn, PlayerIn, TeamIn, TournamentIn
from tournament_api.services import MatchService, PlayerService, TeamService, TournamentService

logger = logging.getLogger(__name__)

SERVICE_NAME = "tournament-api"

_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

_CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
_CORS_HEADERS = ["Content-Type", "Authorization"]


# ---------- Services (stateless; share nothing between requests) ----------

player_service = PlayerService()
team_service = TeamService()
tournament_service = TournamentService()
match_service = MatchService()


# ---------- Dependencies ----------


def get_conn(request: Request) -> Generator[sqlite3.Connection, None, None]:
    """Yield a per-request connection from the app's Database handle."""
    db: Database = request.app.state.db
    with db.session() as conn:
        yield conn


@contextmanager
def relation_errors() -> Iterator[None]:
    """Membership endpoints report every service failure as 400, not-found included."""
    try:
        yield
    except TournamentError as e:
        if e.kind is ErrorKind.VALIDATION:
            raise
        raise RuleViolationError(str(e)) from e


def _error(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def _validation_message(exc: RequestValidationError) -> str:
    """Readable summary of pydantic/FastAPI validation errors."""
    parts: list[str] = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ())]
        source, field = (loc[0], ".".join(loc[1:])) if loc else ("body", "")
        if source == "path":
            parts.append(f"Invalid {field} UUID")
        elif err.get("type") == "json_invalid" or not field:
            parts.append("Invalid request payload")
        else:
            msg = str(err.get("msg", "invalid value"))
            parts.append(f"{field}: {msg}")
    return "; ".join(dict.fromkeys(parts)) or "Invalid request payload"


# ---------- Players ----------

players_router = APIRouter(prefix="/players", tags=["players"])


@players_router.get("")
def list_players(conn: sqlite3.Connection = Depends(get_conn)) -> list[dict[str, Any]]:
    return [p.to_dict() for p in player_service.get_all_players(conn)]


@players_router.post("", status_code=status.HTTP_201_CREATED)
def create_player(req: PlayerIn, conn: sqlite3.Connection = Depends(get_conn)) -> dict[str, Any]:
    return player_service.create_player(conn, req.name, req.date_birth).to_dict()


@players_router.get("/{player_id}")
def get_player(player_id: UUID, conn: sqlite3.Connection = Depends(get_conn)) -> dict[str, Any]:
    return player_service.get_player(conn, player_id).to_dict()


@players_router.put("/{player_id}")
def update_player(player_id: UUID, req: PlayerIn, conn: sqlite3.Connection = Depends(get_conn)) -> dict[str, Any]:
    return player_service.update_player(conn, player_id, req.name, req.date_birth).to_dict()


@players_router.delete("/{player_id}")
def delete_player(player_id: UUID, conn: sqlite3.Connection = Depends(get_conn)) -> dict[str, str]:
    player_service.delete_player(conn, player_id)
    return {"message": "Player deleted"}


# ---------- Teams ----------

teams_router = APIRouter(prefix="/teams", tags=["teams"])


@teams_router.get("")
def list_teams(conn: sqlite3.Connection = Depends(get_conn)) -> list[dict[str, Any]]:
    return [t.to_dict() for t in team_service.get_all_teams(conn)]


@teams_router.post("", status_code=status.HTTP_201_CREATED)
def create_team(req: TeamIn, conn: sqlite3.Connection = Depends(get_conn)) -> dict[str, Any]:
    return team_service.create_team(conn, req.name).to_dict()


@teams_router.get("/{team_id}")
def get_team(team_id: UUID, conn: sqlite3.Connection = Depends(get_conn)) -> dict[str, Any]:
    return team_service.get_team(conn, team_id).to_dict()


@teams_router.put("/{team_id}")
def update_team(team_id: UUID, req: TeamIn, conn: sqlite3.Connection = Depends(get_conn)) -> dict[str, Any]:
    return team_service.update_team(conn, team_id, req.name).to_dict()


@teams_router.delete("/{team_id}")
def delete_team(team_id: UUID, conn: sqlite3.Connection = Depends(get_conn)) -> dict[str, str]:
    team_service.delete_team(conn, team_id)
    return {"message": "Team deleted"}


@teams_router.get("/{team_id}/players")
def list_team_players(team_id: UUID, conn: sqlite3.Connection = Depends(get_conn)) -> list[dict[str, Any]]:
    """Members ordered by name. Unknown team yields an empty list."""
    return [p.to_dict() for p in team_service.get_team_players(conn, team_id)]


@teams_router.post("/{team_id}/players/{player_id}")
def add_player_to_team(
    team_id: UUID, player_id: UUID, conn: sqlite3.Connection = Depends(get_conn)
) -> dict[str, str]:
    with relation_errors():
        team_service.add_player_to_team(conn, team_id, player_id)
    return {"message": "Player added to team"}


@teams_router.delete("/{team_id}/players/{player_id}")
def remove_player_from_team(
    team_id: UUID, player_id: UUID, conn: sqlite3.Connection = Depends(get_conn)
) -> dict[str, str]:
    with relation_errors():
        team_service.remove_player_from_team(conn, team_id, player_id)
    return {"message": "Player removed from team"}


# ---------- Tournaments ----------

tournaments_router = APIRouter(prefix="/tournaments", tags=["tournaments"])


@tournaments_router.get("")
def list_tournaments(conn: sqlite3.Connection = Depends(get_conn)) -> list[dict[str, Any]]:
    return [t.to_dict() for t in tournament_service.get_all_tournaments(conn)]


@tournaments_router.post("", status_code=status.HTTP_201_CREATED)
def create_tournament(req: TournamentIn, conn: sqlite3.Connection = Depends(get_conn)) -> dict[str, Any]:
    return tournament_service.create_tournament(conn, req.name).to_dict()


@tournaments_router.get("/{tournament_id}")
def get_tournament(tournament_id: UUID, conn: sqlite3.Connection = Depends(get_conn)) -> dict[str, Any]:
    return tournament_service.get_tournament(conn, tournament_id).to_dict()


@tournaments_router.put("/{tournament_id}")
def update_tournament(
    tournament_id: UUID, req: TournamentIn, conn: sqlite3.Connection = Depends(get_conn)
) -> dict[str, Any]:
    return tournament_service.update_tournament(conn, tournament_id, req.name).to_dict()


@tournaments_router.delete("/{tournament_id}")
def delete_tournament(tournament_id: UUID, conn: sqlite3.Connection = Depends(get_conn)) -> dict[str, str]:
    tournament_service.delete_tournament(conn, tournament_id)
    return {"message": "Tournament deleted"}


@tournaments_router.get("/{tournament_id}/teams")
def list_tournament_teams(
    tournament_id: UUID, conn: sqlite3.Connection = Depends(get_conn)
) -> list[dict[str, Any]]:
    return [t.to_dict() for t in tournament_service.get_tournament_teams(conn, tournament_id)]


@tournaments_router.post("/{tournament_id}/teams/{team_id}")
def add_team_to_tournament(
    tournament_id: UUID, team_id: UUID, conn: sqlite3.Connection = Depends(get_conn)
) -> dict[str, str]:
    with relation_errors():
        tournament_service.add_team_to_tournament(conn, tournament_id, team_id)
    return {"message": "Team added to tournament"}


@tournaments_router.delete("/{tournament_id}/teams/{team_id}")
def remove_team_from_tournament(
    tournament_id: UUID, team_id: UUID, conn: sqlite3.Connection = Depends(get_conn)
) -> dict[str, str]:
    with relation_errors():
        tournament_service.remove_team_from_tournament(conn, tournament_id, team_id)
    return {"message": "Team removed from tournament"}


# ---------- Matches ----------

matches_router = APIRouter(prefix="/matches", tags=["matches"])


@matches_router.get("")
def list_matches(conn: sqlite3.Connection = Depends(get_conn)) -> list[dict[str, Any]]:
    return [m.to_dict() for m in match_service.get_all_matches(conn)]


@matches_router.post("", status_code=status.HTTP_201_CREATED)
def create_match(req: MatchIn, conn: sqlite3.Connection = Depends(get_conn)) -> dict[str, Any]:
    """Both teams must exist and differ; otherwise 400."""
    match = match_service.create_match(
        conn,
        req.match_number,
        req.date,
        req.team1_id,
        req.team2_id,
        req.goal_scored_team1,
        req.goal_scored_team2,
    )
    return match.to_dict()


@matches_router.get("/{match_id}")
def get_match(match_id: UUID, conn: sqlite3.Connection = Depends(get_conn)) -> dict[str, Any]:
    return match_service.get_match(conn, match_id).to_dict()


@matches_router.put("/{match_id}")
def update_match(match_id: UUID, req: MatchIn, conn: sqlite3.Connection = Depends(get_conn)) -> dict[str, Any]:
    match = match_service.update_match(
        conn,
        match_id,
        req.match_number,
        req.date,
        req.team1_id,
        req.team2_id,
        req.goal_scored_team1,
        req.goal_scored_team2,
    )
    return match.to_dict()


@matches_router.delete("/{match_id}")
def delete_match(match_id: UUID, conn: sqlite3.Connection = Depends(get_conn)) -> dict[str, str]:
    match_service.delete_match(conn, match_id)
    return {"message": "Match deleted"}


api_router = APIRouter(prefix="/api")
api_router.include_router(players_router)
api_router.include_router(teams_router)
api_router.include_router(tournaments_router)
api_router.include_router(matches_router)


# ---------- Exception handlers ----------


async def handle_tournament_error(request: Request, exc: TournamentError) -> JSONResponse:
    status_code = _STATUS_BY_KIND[exc.kind]
    if exc.kind is ErrorKind.INTERNAL:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    elif exc.kind in (ErrorKind.NOT_FOUND, ErrorKind.CONFLICT):
        logger.warning("%s %s: %s", request.method, request.url.path, exc)
    return _error(status_code, exc.message)


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error(status.HTTP_400_BAD_REQUEST, _validation_message(exc))


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


# ---------- App factory ----------


def _preflight_headers(origin: str | None, allowed: list[str]) -> dict[str, str]:
    if "*" in allowed:
        allow_origin = "*"
    elif origin and origin in allowed:
        allow_origin = origin
    else:
        return {}
    return {
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Methods": ", ".join(_CORS_METHODS),
        "Access-Control-Allow-Headers": ", ".join(_CORS_HEADERS),
    }


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app. The Database handle is opened on startup and closed on shutdown."""
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        db = Database(settings.db_path, timeout=settings.db_timeout)
        db.open()
        app.state.db = db
        logger.info("%s started", SERVICE_NAME)
        try:
            yield
        finally:
            db.close()

    app = FastAPI(
        title="Football Tournament API",
        description="Players, teams, tournaments and matches",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_exception_handler(TournamentError, handle_tournament_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=_CORS_METHODS,
        allow_headers=_CORS_HEADERS,
    )

    # Registered last, so it runs first. Every OPTIONS is answered here with an empty 200.
    @app.middleware("http")
    async def answer_preflight(request: Request, call_next):
        cors_headers = _preflight_headers(request.headers.get("origin"), settings.cors_origins)
        if request.method == "OPTIONS":
            return Response(status_code=status.HTTP_200_OK, headers=cors_headers)
        path = request.scope["path"]
        if len(path) > 1 and path.endswith("/"):
            # Dispatch "/api/teams/" as "/api/teams" instead of redirecting
            request.scope["path"] = path.rstrip("/") or "/"
        response = await call_next(request)
        # CORSMiddleware only answers requests that send an Origin
        if "access-control-allow-origin" not in response.headers:
            response.headers.update(cors_headers)
        return response

    app.include_router(api_router)

    @app.get("/health", tags=["health"])
    def health() -> dict[str, str]:
        return {"status": "healthy", "service": SERVICE_NAME}

    return app


app = create_app()
