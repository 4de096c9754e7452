"""SQLite implementation of the grant repository."""

from __future__ import annotations

import asyncio
import sqlite3
from pathlib import Path
from typing import Any, AsyncIterator, Optional

from ..contracts import Grant, GrantKey, GrantRecord
from .repository import GrantRepository


class SQLiteGrantRepository(GrantRepository):
    """Persist account state using SQLite."""

    def __init__(self, db_path: str | Path):
        self.db_path = str(db_path)
        self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._ensure_schema()

    # ------------------------------------------------------------------
    # Schema management
    def _ensure_schema(self) -> None:
        cur = self._conn.cursor()
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS credentials (
                id INTEGER PRIMARY KEY CHECK (id = 1),
                pubkey BLOB NOT NULL
            )
            """
        )
        # TEXT and BLOB both compare byte-wise under the default collation,
        # which keeps pagination order identical to the other backends.
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS grants (
                scope TEXT NOT NULL,
                delegate BLOB NOT NULL,
                grant_json TEXT NOT NULL,
                PRIMARY KEY (scope, delegate)
            )
            """
        )
        self._conn.commit()

    # ------------------------------------------------------------------
    # Helper methods
    def _execute(self, query: str, *params: Any) -> None:
        cur = self._conn.cursor()
        cur.execute(query, params)
        self._conn.commit()

    def _fetchone(self, query: str, *params: Any) -> sqlite3.Row | None:
        cur = self._conn.cursor()
        cur.execute(query, params)
        return cur.fetchone()

    def _fetchall(self, query: str, *params: Any) -> list[sqlite3.Row]:
        cur = self._conn.cursor()
        cur.execute(query, params)
        return cur.fetchall()

    def close(self) -> None:
        self._conn.close()

    # ------------------------------------------------------------------
    # Repository API
    async def save_pubkey(self, pubkey: bytes) -> None:
        await asyncio.to_thread(
            self._execute,
            "INSERT INTO credentials (id, pubkey) VALUES (1, ?) "
            "ON CONFLICT(id) DO UPDATE SET pubkey = excluded.pubkey",
            bytes(pubkey),
        )

    async def load_pubkey(self) -> bytes | None:
        row = await asyncio.to_thread(
            self._fetchone, "SELECT pubkey FROM credentials WHERE id = 1"
        )
        return bytes(row["pubkey"]) if row else None

    async def save_grant(self, scope: str, delegate: bytes, grant: Grant) -> None:
        await asyncio.to_thread(
            self._execute,
            "INSERT INTO grants (scope, delegate, grant_json) VALUES (?, ?, ?) "
            "ON CONFLICT(scope, delegate) DO UPDATE SET grant_json = excluded.grant_json",
            scope,
            bytes(delegate),
            grant.model_dump_json(),
        )

    async def load_grant(self, scope: str, delegate: bytes) -> Grant | None:
        row = await asyncio.to_thread(
            self._fetchone,
            "SELECT grant_json FROM grants WHERE scope = ? AND delegate = ?",
            scope,
            bytes(delegate),
        )
        if not row:
            return None
        return Grant.model_validate_json(row["grant_json"])

    async def delete_grant(self, scope: str, delegate: bytes) -> None:
        await asyncio.to_thread(
            self._execute,
            "DELETE FROM grants WHERE scope = ? AND delegate = ?",
            scope,
            bytes(delegate),
        )

    async def iter_grants(
        self, start_after: Optional[GrantKey] = None, limit: int = 10
    ) -> AsyncIterator[GrantRecord]:
        if start_after is None:
            rows = await asyncio.to_thread(
                self._fetchall,
                "SELECT scope, delegate, grant_json FROM grants "
                "ORDER BY scope, delegate LIMIT ?",
                limit,
            )
        else:
            rows = await asyncio.to_thread(
                self._fetchall,
                "SELECT scope, delegate, grant_json FROM grants "
                "WHERE (scope, delegate) > (?, ?) "
                "ORDER BY scope, delegate LIMIT ?",
                start_after.scope,
                bytes(start_after.delegate),
                limit,
            )
        for row in rows:
            yield GrantRecord(
                scope=row["scope"],
                delegate=bytes(row["delegate"]),
                grant=Grant.model_validate_json(row["grant_json"]),
            )
