from __future__ import annotations

import sqlite3
from typing import Any, Dict, List, Optional, Sequence, Tuple

from research_portfolio.db import Database
from research_portfolio.errors import ConflictError, NotFoundError
from research_portfolio.logger import get_logger
from research_portfolio.util.time import utcnow_iso

log = get_logger(__name__)


class TableRepository:
    """CRUD facade over one table.

    Subclasses declare the table layout; the base class builds the SQL.

    - `insert_columns`: columns a caller supplies on create (key included when caller-supplied)
    - `update_columns`: columns replaced wholesale on update
    - `order_by`: default ordering for `list()`
    """

    table: str = ""
    entity: str = ""
    key: str = "id"
    integer_key: bool = True
    insert_columns: Tuple[str, ...] = ()
    update_columns: Tuple[str, ...] = ()
    order_by: str = "id ASC"
    conflict_detail: str = "conflict"

    def __init__(self, db: Database):
        self.db = db

    # -----------------------------
    # Row mapping
    # -----------------------------

    def _encode(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Convert API values to column values."""
        return dict(data)

    def _decode(self, row: Any) -> Dict[str, Any]:
        """Convert a DB row to the API representation."""
        return dict(row)

    def _coerce_key(self, record_id: Any) -> Optional[Any]:
        if not self.integer_key:
            return str(record_id)
        try:
            return int(str(record_id).strip())
        except (TypeError, ValueError):
            return None

    def _not_found(self) -> NotFoundError:
        return NotFoundError(f"{self.entity}_not_found")

    # -----------------------------
    # Queries
    # -----------------------------

    def _select(self, where: str = "", params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        sql = f"SELECT * FROM {self.table}"
        if where:
            sql += f" WHERE {where}"
        sql += f" ORDER BY {self.order_by}"
        with self.db.connect() as conn:
            rows = conn.execute(sql, tuple(params)).fetchall()
        return [self._decode(r) for r in rows]

    def list(self, **filters: Any) -> List[Dict[str, Any]]:
        return self._select()

    def count(self) -> int:
        with self.db.connect() as conn:
            row = conn.execute(f"SELECT COUNT(*) AS n FROM {self.table}").fetchone()
        return int(row["n"])

    def get(self, record_id: Any) -> Dict[str, Any]:
        key = self._coerce_key(record_id)
        if key is None:
            raise self._not_found()
        with self.db.connect() as conn:
            row = conn.execute(
                f"SELECT * FROM {self.table} WHERE {self.key}=?",
                (key,),
            ).fetchone()
        if row is None:
            raise self._not_found()
        return self._decode(row)

    # -----------------------------
    # Mutations
    # -----------------------------

    def create(self, data: Dict[str, Any]) -> Any:
        """Insert a record and return its key."""
        values = self._encode(data)
        now = utcnow_iso()
        cols = list(self.insert_columns) + ["created_at", "updated_at"]
        params = [values.get(c) for c in self.insert_columns] + [now, now]
        placeholders = ",".join("?" for _ in cols)

        try:
            with self.db.connect() as conn:
                cur = conn.execute(
                    f"INSERT INTO {self.table} ({', '.join(cols)}) VALUES ({placeholders})",
                    params,
                )
                new_id = cur.lastrowid
        except sqlite3.IntegrityError as e:
            # PRIMARY KEY violations are also reported as UNIQUE by SQLite.
            if "UNIQUE" in str(e).upper():
                raise ConflictError(self.conflict_detail) from e
            raise

        if self.integer_key:
            return int(new_id)
        return values[self.key]

    def update(self, record_id: Any, data: Dict[str, Any]) -> None:
        """Replace the updatable columns of a record."""
        key = self._coerce_key(record_id)
        if key is None:
            raise self._not_found()

        values = self._encode(data)
        sets = ", ".join(f"{c}=?" for c in self.update_columns)
        params = [values.get(c) for c in self.update_columns] + [utcnow_iso(), key]
        with self.db.connect() as conn:
            cur = conn.execute(
                f"UPDATE {self.table} SET {sets}, updated_at=? WHERE {self.key}=?",
                params,
            )
            changed = cur.rowcount
        if changed == 0:
            raise self._not_found()

    def delete(self, record_id: Any) -> None:
        key = self._coerce_key(record_id)
        if key is None:
            raise self._not_found()
        with self.db.connect() as conn:
            cur = conn.execute(f"DELETE FROM {self.table} WHERE {self.key}=?", (key,))
            changed = cur.rowcount
        if changed == 0:
            raise self._not_found()
        log.info("Deleted %s %s", self.entity, key)
