"""In-memory implementation of the grant repository."""

from __future__ import annotations

from typing import AsyncIterator, Dict, Optional, Tuple

from ..contracts import Grant, GrantKey, GrantRecord
from .repository import GrantRepository


class InMemoryGrantRepository(GrantRepository):
    """Store account state in local memory.

    Useful for tests or when no database is configured. Data is not
    persisted across process restarts.
    """

    def __init__(self) -> None:
        self._pubkey: bytes | None = None
        self._grants: Dict[Tuple[str, bytes], Grant] = {}

    # ------------------------------------------------------------------
    async def save_pubkey(self, pubkey: bytes) -> None:
        self._pubkey = bytes(pubkey)

    async def load_pubkey(self) -> bytes | None:
        return self._pubkey

    async def save_grant(self, scope: str, delegate: bytes, grant: Grant) -> None:
        self._grants[(scope, bytes(delegate))] = grant.model_copy(deep=True)

    async def load_grant(self, scope: str, delegate: bytes) -> Grant | None:
        grant = self._grants.get((scope, bytes(delegate)))
        return grant.model_copy(deep=True) if grant else None

    async def delete_grant(self, scope: str, delegate: bytes) -> None:
        self._grants.pop((scope, bytes(delegate)), None)

    async def iter_grants(
        self, start_after: Optional[GrantKey] = None, limit: int = 10
    ) -> AsyncIterator[GrantRecord]:
        keys = sorted(self._grants, key=lambda k: (k[0].encode("utf-8"), k[1]))
        if start_after is not None:
            cursor = start_after.sort_key()
            keys = [k for k in keys if (k[0].encode("utf-8"), k[1]) > cursor]
        for scope, delegate in keys[:limit]:
            grant = self._grants.get((scope, delegate))
            if grant is None:
                continue
            yield GrantRecord(
                scope=scope, delegate=delegate, grant=grant.model_copy(deep=True)
            )
