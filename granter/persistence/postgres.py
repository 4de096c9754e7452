"""PostgreSQL implementation of the grant repository."""

from __future__ import annotations

from typing import AsyncIterator, Optional

import asyncpg

from ..contracts import Grant, GrantKey, GrantRecord
from .repository import GrantRepository


class PostgresGrantRepository(GrantRepository):
    """Persist account state using PostgreSQL."""

    def __init__(self, dsn: str):
        self._dsn = dsn
        self._initialized = False

    async def _connect(self) -> asyncpg.Connection:
        conn = await asyncpg.connect(self._dsn)
        if not self._initialized:
            await self._ensure_schema(conn)
            self._initialized = True
        return conn

    async def _ensure_schema(self, conn: asyncpg.Connection) -> None:
        await conn.execute(
            """
            CREATE TABLE IF NOT EXISTS credentials (
                id INTEGER PRIMARY KEY CHECK (id = 1),
                pubkey BYTEA NOT NULL
            )
            """
        )
        await conn.execute(
            """
            CREATE TABLE IF NOT EXISTS grants (
                scope TEXT COLLATE "C" NOT NULL,
                delegate BYTEA NOT NULL,
                grant_json JSONB NOT NULL,
                PRIMARY KEY (scope, delegate)
            )
            """
        )

    # ------------------------------------------------------------------
    async def save_pubkey(self, pubkey: bytes) -> None:
        conn = await self._connect()
        try:
            await conn.execute(
                """
                INSERT INTO credentials (id, pubkey) VALUES (1, $1)
                ON CONFLICT (id) DO UPDATE SET pubkey = EXCLUDED.pubkey
                """,
                bytes(pubkey),
            )
        finally:
            await conn.close()

    async def load_pubkey(self) -> bytes | None:
        conn = await self._connect()
        try:
            row = await conn.fetchrow("SELECT pubkey FROM credentials WHERE id = 1")
        finally:
            await conn.close()
        return bytes(row["pubkey"]) if row else None

    async def save_grant(self, scope: str, delegate: bytes, grant: Grant) -> None:
        conn = await self._connect()
        try:
            await conn.execute(
                """
                INSERT INTO grants (scope, delegate, grant_json) VALUES ($1, $2, $3)
                ON CONFLICT (scope, delegate) DO UPDATE SET grant_json = EXCLUDED.grant_json
                """,
                scope,
                bytes(delegate),
                grant.model_dump_json(),
            )
        finally:
            await conn.close()

    async def load_grant(self, scope: str, delegate: bytes) -> Grant | None:
        conn = await self._connect()
        try:
            row = await conn.fetchrow(
                "SELECT grant_json::text AS grant_json FROM grants WHERE scope = $1 AND delegate = $2",
                scope,
                bytes(delegate),
            )
        finally:
            await conn.close()
        if not row:
            return None
        return Grant.model_validate_json(row["grant_json"])

    async def delete_grant(self, scope: str, delegate: bytes) -> None:
        conn = await self._connect()
        try:
            await conn.execute(
                "DELETE FROM grants WHERE scope = $1 AND delegate = $2",
                scope,
                bytes(delegate),
            )
        finally:
            await conn.close()

    async def iter_grants(
        self, start_after: Optional[GrantKey] = None, limit: int = 10
    ) -> AsyncIterator[GrantRecord]:
        conn = await self._connect()
        try:
            if start_after is None:
                rows = await conn.fetch(
                    """
                    SELECT scope, delegate, grant_json::text AS grant_json FROM grants
                    ORDER BY scope, delegate LIMIT $1
                    """,
                    limit,
                )
            else:
                rows = await conn.fetch(
                    """
                    SELECT scope, delegate, grant_json::text AS grant_json FROM grants
                    WHERE (scope, delegate) > ($1, $2)
                    ORDER BY scope, delegate LIMIT $3
                    """,
                    start_after.scope,
                    bytes(start_after.delegate),
                    limit,
                )
        finally:
            await conn.close()
        for r in rows:
            yield GrantRecord(
                scope=r["scope"],
                delegate=bytes(r["delegate"]),
                grant=Grant.model_validate_json(r["grant_json"]),
            )
