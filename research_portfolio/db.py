from __future__ import annotations

import sqlite3
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from research_portfolio.config import MEMORY_DSN
from research_portfolio.logger import get_logger
from research_portfolio.schema import get_schema_sql

log = get_logger(__name__)


def _sqlite_path(dsn: str) -> str:
    s = (dsn or "").strip()
    # Support sqlite:///path style
    if s.lower().startswith("sqlite:///"):
        s = s[len("sqlite:///") :]
    return s or MEMORY_DSN


class Database:
    """Connection factory for the SQLite store.

    File-backed mode opens a fresh connection per unit of work.

    In-memory mode (dsn ":memory:") uses a uniquely named shared-cache database so
    every connection opened through this object sees the same data. An anchor
    connection keeps it alive until `close()`; nothing survives a process restart.
    """

    def __init__(self, dsn: str):
        self.dsn = _sqlite_path(dsn)
        self.in_memory = self.dsn == MEMORY_DSN
        self._anchor: sqlite3.Connection | None = None

        if self.in_memory:
            self._target = f"file:research_portfolio_{uuid.uuid4().hex}?mode=memory&cache=shared"
            self._anchor = self._open()
        else:
            self._target = self.dsn
            Path(self.dsn).parent.mkdir(parents=True, exist_ok=True)

    def _open(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._target, timeout=30, check_same_thread=False, uri=self.in_memory)
        conn.row_factory = sqlite3.Row
        if not self.in_memory:
            # Concurrency pragmas for a file shared by the API threadpool.
            conn.execute("PRAGMA journal_mode=WAL;")
            conn.execute("PRAGMA synchronous=NORMAL;")
            conn.execute("PRAGMA busy_timeout=5000;")  # 5s
        return conn

    @contextmanager
    def connect(self) -> Iterator[Any]:
        """Yield a connection; commit on success, roll back on error."""
        conn = self._open()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def close(self) -> None:
        if self._anchor is not None:
            self._anchor.close()
            self._anchor = None

    def describe(self) -> str:
        return "in-memory" if self.in_memory else f"file {self.dsn}"


def init_db(db: Database) -> None:
    """Create all tables (idempotent)."""
    log.info("Initializing DB (%s)", db.describe())
    with db.connect() as conn:
        conn.executescript(get_schema_sql())
