"""
Database handle: opened once at startup, closed once at shutdown.
Hands out one sqlite3 connection per request; repositories receive it explicitly.
"""
from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .schema import all_schema_sql

logger = logging.getLogger(__name__)


class Database:
    """
    Explicitly constructed storage handle.
    open() creates the file and schema; connect() returns a new connection with
    foreign keys enforced and a bounded lock wait; close() stops handing out connections.
    """

    def __init__(self, path: str | Path, timeout: float = 5.0) -> None:
        self.path = Path(path)
        self.timeout = timeout
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        conn = self._raw_connect()
        try:
            conn.executescript(all_schema_sql())
            conn.commit()
        finally:
            conn.close()
        self._open = True
        logger.info("Database ready at %s", self.path)

    def close(self) -> None:
        if self._open:
            self._open = False
            logger.info("Database closed at %s", self.path)

    def connect(self) -> sqlite3.Connection:
        """Return a new connection. Caller must close it (see session())."""
        if not self._open:
            raise RuntimeError("Database is not open; call open() first")
        return self._raw_connect()

    @contextmanager
    def session(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection, ensure close on exit."""
        conn = self.connect()
        try:
            yield conn
        finally:
            conn.close()

    def _raw_connect(self) -> sqlite3.Connection:
        # One request's dependency and endpoint may run on different threadpool workers
        conn = sqlite3.connect(str(self.path), timeout=self.timeout, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn
