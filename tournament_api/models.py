"""
Data models for the tournament backend.
Domain objects only; no persistence or API logic.

Every entity is created through ``new(...)`` which stamps a fresh id and a UTC
creation time; ids and created_at never change afterwards.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


# ---------- Time helpers (RFC3339) ----------


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_datetime(s: str | None) -> datetime:
    """
    Parse an RFC3339 timestamp ("1987-06-24T00:00:00Z" or with an explicit offset).
    Naive values are rejected; the result is normalized to UTC.
    """
    if not s:
        raise ValueError("expected datetime string")
    if "T" not in s and "t" not in s:
        raise ValueError(f"invalid RFC3339 datetime: {s!r}")
    try:
        dt = datetime.fromisoformat(s.replace("Z", "+00:00").replace("z", "+00:00"))
    except ValueError:
        raise ValueError(f"invalid RFC3339 datetime: {s!r}") from None
    if dt.tzinfo is None:
        raise ValueError(f"datetime must carry a timezone offset: {s!r}")
    try:
        return dt.astimezone(timezone.utc)
    except OverflowError:
        raise ValueError(f"datetime out of range: {s!r}") from None


def format_datetime(dt: datetime) -> str:
    """RFC3339 in UTC with a trailing Z."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def to_db_datetime(dt: datetime) -> str:
    """Fixed-width ISO text so created_at sorts lexically."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="microseconds")


# ---------- Player ----------
@dataclass
class Player:
    """A footballer. Leaf entity."""
    id: uuid.UUID
    name: str
    date_birth: datetime
    created_at: datetime

    @classmethod
    def new(cls, name: str, date_birth: datetime) -> Player:
        return cls(id=uuid.uuid4(), name=name, date_birth=date_birth, created_at=utc_now())

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "name": self.name,
            "date_birth": format_datetime(self.date_birth),
            "created_at": format_datetime(self.created_at),
        }


# ---------- Team ----------
@dataclass
class Team:
    """
    A football team. Name is unique (enforced by storage).
    players is only populated by an explicit membership query; None means "not loaded".
    """
    id: uuid.UUID
    name: str
    created_at: datetime
    players: list[Player] | None = None

    @classmethod
    def new(cls, name: str) -> Team:
        return cls(id=uuid.uuid4(), name=name, created_at=utc_now())

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": str(self.id),
            "name": self.name,
            "created_at": format_datetime(self.created_at),
        }
        if self.players:
            d["players"] = [p.to_dict() for p in self.players]
        return d


# ---------- Tournament ----------
@dataclass
class Tournament:
    id: uuid.UUID
    name: str
    created_at: datetime
    teams: list[Team] | None = None

    @classmethod
    def new(cls, name: str) -> Tournament:
        return cls(id=uuid.uuid4(), name=name, created_at=utc_now())

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": str(self.id),
            "name": self.name,
            "created_at": format_datetime(self.created_at),
        }
        if self.teams:
            d["teams"] = [t.to_dict() for t in self.teams]
        return d


# ---------- Match ----------
@dataclass
class Match:
    """
    A fixture between two distinct teams.
    team1_id != team2_id is checked by MatchService and by a storage CHECK constraint.
    """
    id: uuid.UUID
    match_number: int
    date: datetime
    team1_id: uuid.UUID
    team2_id: uuid.UUID
    goal_scored_team1: int
    goal_scored_team2: int
    created_at: datetime

    @classmethod
    def new(
        cls,
        match_number: int,
        date: datetime,
        team1_id: uuid.UUID,
        team2_id: uuid.UUID,
        goal_scored_team1: int = 0,
        goal_scored_team2: int = 0,
    ) -> Match:
        return cls(
            id=uuid.uuid4(),
            match_number=match_number,
            date=date,
            team1_id=team1_id,
            team2_id=team2_id,
            goal_scored_team1=goal_scored_team1,
            goal_scored_team2=goal_scored_team2,
            created_at=utc_now(),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "match_number": self.match_number,
            "date": format_datetime(self.date),
            "team1_id": str(self.team1_id),
            "team2_id": str(self.team2_id),
            "goal_scored_team1": self.goal_scored_team1,
            "goal_scored_team2": self.goal_scored_team2,
            "created_at": format_datetime(self.created_at),
        }
