"""
Process configuration, read once from the environment at startup.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


def _default_db_path() -> Path:
    return Path(__file__).resolve().parent.parent / "data" / "tournament.db"


def _split_origins(raw: str) -> list[str]:
    return [o.strip() for o in raw.split(",") if o.strip()] or ["*"]


@dataclass
class Settings:
    db_path: Path = field(default_factory=_default_db_path)
    db_timeout: float = 5.0
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> Settings:
        db_path = os.environ.get("TOURNAMENT_DB_PATH")
        return cls(
            db_path=Path(db_path) if db_path else _default_db_path(),
            db_timeout=float(os.environ.get("TOURNAMENT_DB_TIMEOUT", "5.0")),
            host=os.environ.get("API_HOST", "0.0.0.0"),
            port=int(os.environ.get("API_PORT", "8080")),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
            cors_origins=_split_origins(os.environ.get("CORS_ORIGINS", "*")),
        )
