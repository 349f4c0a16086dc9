"""
Request bodies (transfer shapes). Only the mutable fields of each resource;
ids come from the path. Dates must be RFC3339 and are normalized to UTC.
"""
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from tournament_api.models import parse_datetime

# SQLite INTEGER is a signed 64-bit value
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def _rfc3339(v: object) -> datetime:
    if not isinstance(v, str):
        raise ValueError("date must be an RFC3339 string, e.g. 2023-06-24T00:00:00Z")
    return parse_datetime(v)


class PlayerIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    date_birth: datetime = Field(..., description="RFC3339, e.g. 1987-06-24T00:00:00Z")

    @field_validator("date_birth", mode="before")
    @classmethod
    def _parse_date_birth(cls, v: object) -> datetime:
        return _rfc3339(v)


class TeamIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class TournamentIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class MatchIn(BaseModel):
    match_number: int = Field(..., ge=INT64_MIN, le=INT64_MAX)
    date: datetime = Field(..., description="RFC3339 kick-off time")
    team1_id: UUID
    team2_id: UUID
    goal_scored_team1: int = Field(default=0, ge=0, le=INT64_MAX)
    goal_scored_team2: int = Field(default=0, ge=0, le=INT64_MAX)

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, v: object) -> datetime:
        return _rfc3339(v)
