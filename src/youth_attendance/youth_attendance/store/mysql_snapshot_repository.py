from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone


class MySQLSnapshotRepository:
    """Key-value snapshots in the ``app_state`` table (see database/schema.sql)."""

    def __init__(self, conn: DatabaseConnection):
        self._conn = conn

    def load(self, key: str) -> Optional[str]:
        with db_cursor(self._conn) as (_, cur):
            cur.execute("SELECT state_value FROM app_state WHERE state_key=%s", (key,))
            row = fetchone(cur)
            return str(row["state_value"]) if row else None

    def save(self, key: str, value: str) -> None:
        with db_cursor(self._conn) as (_, cur):
            cur.execute(
                """
                INSERT INTO app_state (state_key, state_value)
                VALUES (%s, %s)
                ON DUPLICATE KEY UPDATE state_value=VALUES(state_value), updated_at=CURRENT_TIMESTAMP
                """,
                (key, value),
            )

    def delete(self, key: str) -> bool:
        with db_cursor(self._conn) as (_, cur):
            cur.execute("DELETE FROM app_state WHERE state_key=%s", (key,))
            return cur.rowcount > 0
