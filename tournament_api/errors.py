"""
Error kinds shared by repositories, services and the HTTP layer.
The API maps each kind to a status code; it never matches on message text.
"""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    CONFLICT = "conflict"
    INTERNAL = "internal"


class TournamentError(Exception):
    """Base for all domain errors. Carries a kind and a human-readable message."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class NotFoundError(TournamentError):
    """Entity missing by id, or zero rows affected by update/delete."""

    kind = ErrorKind.NOT_FOUND


class RuleViolationError(TournamentError):
    """Business rule violated (self-match, dangling team reference)."""

    kind = ErrorKind.VALIDATION


class ConflictError(TournamentError):
    """Storage constraint rejected the write (unique name, duplicate membership, FK, CHECK)."""

    kind = ErrorKind.CONFLICT


class InternalError(TournamentError):
    """Storage or connectivity failure."""

    kind = ErrorKind.INTERNAL
